from typing import Annotated, Any, ClassVar, Optional, Tuple, Type, TypeVar, get_args

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T", bound=BaseModel)


def _is_text(annotation) -> bool:
    return annotation is str or str in get_args(annotation)


# secrets are compared byte for byte; surrounding spaces are part of them
RawStr = Annotated[str, StringConstraints(strip_whitespace=False)]


class RequestSchema(BaseModel):
    """Request bodies use camelCase keys; form values arrive as strings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    # fields that may be omitted on update but never cleared
    NOT_NULL: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _blank_fields(cls, data: Any) -> Any:
        """
        An empty form field means "not given": fields with a default (or
        that may not be cleared) fall back to it, the rest become None.
        """
        if not isinstance(data, dict):
            return data

        cleaned = dict(data)
        for name, field in cls.model_fields.items():
            for key in {name, field.alias or name}:
                value = cleaned.get(key)
                if not isinstance(value, str) or value.strip() != "":
                    continue
                if cls._blank_means_default(name, field):
                    del cleaned[key]
                else:
                    cleaned[key] = None
        return cleaned

    @classmethod
    def _blank_means_default(cls, name, field) -> bool:
        if not field.is_required() and field.default is not None:
            return True
        # flags and numbers that may not be cleared keep their stored value
        return name in cls.NOT_NULL and not _is_text(field.annotation)

    @model_validator(mode="after")
    def _no_cleared_required(self):
        for name in self.NOT_NULL:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be empty")
        return self


def parse_body(schema: Type[T], data: Optional[dict]) -> T:
    """Raises pydantic.ValidationError; the app maps it to a 400."""
    return schema.model_validate(data or {})


def format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
        msg = err.get("msg", "Invalid value")
        parts.append(f'{msg} at "{loc}"' if loc else msg)
    return "Validation error: " + "; ".join(parts)
