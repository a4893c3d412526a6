"""
Declarative field maps and the placement builder shared by both forms.

A form is described as data (FormDefinition): which submission field is drawn
where, which value of an enumerated field selects which checkbox, and where
the place/date stamp goes. build_placements() turns a submission into the
ordered list of FieldPlacement draw instructions. It is pure and total:
unknown enumeration values and empty optional fields simply draw nothing.

Coordinates are PDF points, origin bottom-left of the first page.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import List, Mapping, Optional, Tuple

DEFAULT_FONT_SIZE = 12
MARK = "X"
PLACE_NAME = "Pedro Vicente Maldonado"

# Ecuador mainland, no DST
ECUADOR_TZ = timezone(timedelta(hours=-5))

MESES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

# Reception methods
PRESENCIAL = "Presencial"
ELECTRONICO = "Electrónico"
RECEPTION_EMAIL_FIELD = "correoRecepcion"
RECEPTION_FIELD = "recepcionDocumento"


@dataclass(frozen=True)
class FieldPlacement:
    """One text draw instruction on the template's first page."""
    x: float
    y: float
    text: str
    font_size: float = DEFAULT_FONT_SIZE
    name: str = ""


@dataclass(frozen=True)
class FieldSpec:
    """Where a submission field is drawn.

    default is drawn when the submitted value is empty; None means skip.
    """
    field: str
    x: float
    y: float
    default: Optional[str] = None
    font_size: float = DEFAULT_FONT_SIZE


@dataclass(frozen=True)
class MarkOptions:
    """Mutually exclusive checkbox group keyed by exact submitted value."""
    field: str
    options: Mapping[str, Tuple[float, float]]

    def select(self, value) -> Optional[Tuple[float, float]]:
        """Coordinates for value, or None when the value is not an option."""
        if not isinstance(value, str):
            return None
        return self.options.get(value)


@dataclass(frozen=True)
class FormDefinition:
    name: str
    template: str
    filename: str
    required: Tuple[str, ...]
    fields: Tuple[FieldSpec, ...]
    reception: MarkOptions
    reception_email: FieldSpec
    place_at: Tuple[float, float]
    date_at: Tuple[float, float]
    usage: Optional[MarkOptions] = None
    optional: Tuple[str, ...] = ()

    def conditional_required(self, submission: Mapping) -> List[str]:
        """Fields that become required because of another field's value."""
        if submission.get(RECEPTION_FIELD) == ELECTRONICO:
            return [RECEPTION_EMAIL_FIELD]
        return []


def today_in_ecuador() -> date:
    return datetime.now(ECUADOR_TZ).date()


def format_spanish_date(day: date) -> str:
    """19 de octubre de 2026"""
    return f"{day.day} de {MESES[day.month - 1]} de {day.year}"


def field_text(submission: Mapping, name: str) -> str:
    """Submitted value as drawable text, unstripped.

    '' for absent and falsy values (None, False, 0, "") and for lists/objects.
    """
    value = submission.get(name)
    if not value or isinstance(value, (dict, list)):
        return ""
    return str(value)


def is_blank(submission: Mapping, name: str) -> bool:
    """True when the field is absent, falsy or whitespace only."""
    return not field_text(submission, name).strip()


def _from_spec(spec: FieldSpec, submission: Mapping) -> Optional[FieldPlacement]:
    if is_blank(submission, spec.field):
        text = spec.default
    else:
        text = field_text(submission, spec.field)
    if not text:
        return None
    return FieldPlacement(spec.x, spec.y, text, spec.font_size, spec.field)


def build_placements(definition: FormDefinition, submission: Mapping,
                     today: Optional[date] = None) -> List[FieldPlacement]:
    placements = []
    for spec in definition.fields:
        placement = _from_spec(spec, submission)
        if placement is not None:
            placements.append(placement)

    if definition.usage is not None:
        coords = definition.usage.select(submission.get(definition.usage.field))
        if coords is not None:
            placements.append(FieldPlacement(coords[0], coords[1], MARK, name="marcarUso"))

    reception = submission.get(definition.reception.field)
    coords = definition.reception.select(reception)
    if coords is not None:
        placements.append(FieldPlacement(coords[0], coords[1], MARK, name="marcarRecepcion"))
        if reception == ELECTRONICO:
            placement = _from_spec(definition.reception_email, submission)
            if placement is not None:
                placements.append(placement)

    stamp_date = today or today_in_ecuador()
    placements.append(FieldPlacement(definition.place_at[0], definition.place_at[1],
                                     PLACE_NAME, name="lugar"))
    placements.append(FieldPlacement(definition.date_at[0], definition.date_at[1],
                                     format_spanish_date(stamp_date), name="fechaActual"))
    return placements

