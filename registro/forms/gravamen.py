"""
Gravamen certificate request (template 2.pdf).

Billing block, certification block (owner, property, registry references),
usage reason checkbox, reception method checkbox, place/date stamp and the
requester's ID at the bottom.
"""

from ..core.paths import GRAVAMEN_TEMPLATE
from .fields import ELECTRONICO, PRESENCIAL, FieldSpec, FormDefinition, MarkOptions

REQUIRED = (
    "nombre", "cedulaFacturacion", "direccion", "telefono",
    "apellidos", "cedulaCertificacion", "lugarInmueble",
    "usoCertificacion", "especifiqueUso", "recepcionDocumento",
    "cedulaSolicitante",
)

OPTIONAL = (
    "correo", "estadoCivil", "libro", "numeroInscripcion", "fechaInscripcion",
    "tomo", "repertorio", "fichaRegistral", "otro", "correoRecepcion",
)

FIELDS = (
    # Datos de facturación
    FieldSpec("nombre", 95, 700),
    FieldSpec("cedulaFacturacion", 300, 670),
    FieldSpec("direccion", 80, 650),
    FieldSpec("correo", 135, 625),
    FieldSpec("telefono", 440, 625),
    # Datos de certificación
    FieldSpec("apellidos", 95, 570),
    FieldSpec("cedulaCertificacion", 390, 540),
    FieldSpec("estadoCivil", 140, 525),
    FieldSpec("lugarInmueble", 95, 510),
    FieldSpec("libro", 150, 450),
    FieldSpec("numeroInscripcion", 320, 450),
    FieldSpec("fechaInscripcion", 473, 455),
    FieldSpec("tomo", 150, 420),
    FieldSpec("repertorio", 320, 420),
    FieldSpec("fichaRegistral", 490, 420),
    FieldSpec("otro", 260, 395, default="N/A"),
    FieldSpec("especifiqueUso", 140, 150, default="N/A"),
    FieldSpec("cedulaSolicitante", 400, 120),
)

USAGE = MarkOptions("usoCertificacion", {
    "Tramites Judiciales": (220, 296),
    "Instituciones Bancarias": (220, 260),
    "Instituciones Publicas": (220, 221),
    "Otro": (220, 180),
})

RECEPTION = MarkOptions("recepcionDocumento", {
    PRESENCIAL: (398, 308),
    ELECTRONICO: (398, 280),
})

GRAVAMEN = FormDefinition(
    name="gravamen",
    template=GRAVAMEN_TEMPLATE,
    filename="Formulario_Gravamen.pdf",
    required=REQUIRED,
    optional=OPTIONAL,
    fields=FIELDS,
    usage=USAGE,
    reception=RECEPTION,
    reception_email=FieldSpec("correoRecepcion", 360, 260),
    place_at=(400, 225),
    date_at=(340, 210),
)
