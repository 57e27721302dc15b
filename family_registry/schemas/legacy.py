from datetime import date, datetime
from typing import Annotated, Any, Mapping
import logging
from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)


def coerce_ser_no(value: Any) -> int | None:
    # 0, "", booleans, negatives and non-numbers all mean "no serial number"
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    if isinstance(value, float) and value != number:
        return None
    return number if number > 0 else None


def coerce_ser_no_list(values: Any) -> list[int]:
    if not isinstance(values, (list, tuple)):
        return []
    out: list[int] = []
    for v in values:
        n = coerce_ser_no(v)
        if n is not None and n not in out:
            out.append(n)
    return out


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _flatten_address(value: Any) -> Any:
    if isinstance(value, Mapping):
        parts = [str(value.get(k) or "").strip() for k in ("street", "city", "state", "postalCode", "country")]
        return ", ".join(p for p in parts if p) or None
    return _blank_to_none(value)


def _aliases(*names: str) -> AliasChoices:
    # nested personalDetails wins over the flat spelling
    return AliasChoices(*(AliasPath("personalDetails", n) for n in names), *names)


SerNo = Annotated[int | None, BeforeValidator(coerce_ser_no)]
Text = Annotated[str | None, BeforeValidator(_blank_to_none)]
_datetime = TypeAdapter(datetime)


class LegacyMemberIn(BaseModel):
    """Member document in any of its historical shapes, mapped onto Member columns."""
    model_config = ConfigDict(str_strip_whitespace=True, coerce_numbers_to_str=True)

    ser_no: SerNo = Field(None, validation_alias=_aliases("ser_no", "serNo", "SerNo", "serno", "Ser No"))
    father_ser_no: SerNo = Field(None, validation_alias=_aliases("father_ser_no", "fatherSerNo", "FatherSerNo", "fatherSerno"))
    mother_ser_no: SerNo = Field(None, validation_alias=_aliases("mother_ser_no", "motherSerNo", "MotherSerNo"))
    spouse_ser_no: SerNo = Field(None, validation_alias=_aliases("spouse_ser_no", "spouseSerNo", "SpouseSerNo"))
    son_daughter_ser_nos: Annotated[list[int], BeforeValidator(coerce_ser_no_list)] = Field(
        default_factory=list,
        validation_alias=_aliases("son_daughter_ser_nos", "sonDaughterSerNo", "childrenSerNos", "children_ser_nos"),
    )
    first_name: Text = Field(None, validation_alias=_aliases("first_name", "firstName", "First Name", "firstname", "FirstName"))
    middle_name: Text = Field(None, validation_alias=_aliases("middle_name", "middleName", "Middle Name", "middlename"))
    last_name: Text = Field(None, validation_alias=_aliases("last_name", "lastName", "Last Name", "lastname", "LastName"))
    gender: Text = Field(None, validation_alias=_aliases("gender", "Gender"))
    date_of_birth: date | None = Field(None, validation_alias=_aliases("date_of_birth", "dateOfBirth", "Date of Birth", "dob"))
    date_of_death: date | None = Field(None, validation_alias=_aliases("date_of_death", "dateOfDeath", "Death Date"))
    email: Text = Field(None, validation_alias=_aliases("email", "Email", "gmail", "emailAddress", "mail"))
    phone: Text = Field(None, validation_alias=_aliases("phone", "phoneNumber", "mobileNumber", "Phone", "mobile"))
    address: Annotated[str | None, BeforeValidator(_flatten_address)] = Field(None, validation_alias=_aliases("address", "Address"))
    occupation: Text = Field(None, validation_alias=_aliases("occupation", "Occupation"))
    vansh: Text = Field(None, validation_alias=_aliases("vansh", "vanshNumber", "Vansh"))
    notes: Text = Field(None, validation_alias=_aliases("notes", "Notes", "biography"))
    # some documents only carry a single composed name
    name: Text = None

    @field_validator("date_of_birth", "date_of_death", mode="wrap")
    @classmethod
    def _lenient_date(cls, value, handler):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            return handler(value)
        except ValidationError:
            pass
        try:
            return _datetime.validate_python(value).date()
        except ValidationError:
            logger.debug(f"Ignoring unparseable date {value!r}")
            return None

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str | None) -> str | None:
        return value.lower() if value else value

    @model_validator(mode="after")
    def _split_name(self):
        if not self.first_name and self.name:
            first, _, rest = self.name.partition(" ")
            self.first_name = first
            if rest and not self.last_name:
                self.last_name = rest.strip()
        return self

    def member_fields(self) -> dict[str, Any]:
        """Only the fields that carry a value, ready for ``Member(**fields)``."""
        fields = self.model_dump(exclude={"name"}, exclude_none=True)
        if not fields.get("son_daughter_ser_nos"):
            fields.pop("son_daughter_ser_nos", None)
        return fields
