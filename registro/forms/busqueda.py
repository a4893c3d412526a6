"""Búsqueda certificate request (template 1.pdf)."""

from ..core.paths import BUSQUEDA_TEMPLATE
from .fields import ELECTRONICO, PRESENCIAL, FieldSpec, FormDefinition, MarkOptions

REQUIRED = (
    "nombre", "cedulaFacturacion", "direccion", "telefono",
    "nombresCompletos", "cedula", "estadoCivil", "nombresSolicitante",
    "cedulaSolicitante", "estadoCivilSolicitante", "declaracionUso",
    "recepcionDocumento",
)

OPTIONAL = ("correo", "correoRecepcion")

FIELDS = (
    # Datos de facturación
    FieldSpec("nombre", 95, 665),
    FieldSpec("cedulaFacturacion", 300, 635),
    FieldSpec("direccion", 80, 612),
    FieldSpec("correo", 135, 590),
    FieldSpec("telefono", 440, 590),
    # Datos de búsqueda
    FieldSpec("nombresCompletos", 95, 520),
    FieldSpec("cedula", 270, 488),
    FieldSpec("estadoCivil", 460, 488),
    FieldSpec("nombresSolicitante", 180, 440),
    FieldSpec("cedulaSolicitante", 390, 410),
    FieldSpec("estadoCivilSolicitante", 140, 388),
    FieldSpec("declaracionUso", 110, 366),
)

RECEPTION = MarkOptions("recepcionDocumento", {
    PRESENCIAL: (161, 183),
    ELECTRONICO: (161, 143),
})

BUSQUEDA = FormDefinition(
    name="busqueda",
    template=BUSQUEDA_TEMPLATE,
    filename="Formulario_Busqueda.pdf",
    required=REQUIRED,
    optional=OPTIONAL,
    fields=FIELDS,
    reception=RECEPTION,
    reception_email=FieldSpec("correoRecepcion", 80, 107),
    place_at=(390, 222),
    date_at=(340, 200),
)
