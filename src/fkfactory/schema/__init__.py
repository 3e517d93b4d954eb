"""Schema module - declaration parsing and field classification."""

from fkfactory.schema.categorize import CategorizedFields, categorize
from fkfactory.schema.markers import NO_DEFAULT, fk, pk, required
from fkfactory.schema.models import FactorySchema, FieldKind, FieldSpec, FkDescriptor
from fkfactory.schema.parser import parse_factory, parse_factory_header, parse_field_attributes
from fkfactory.schema.types import FieldShape, field_shape

__all__ = [
    "NO_DEFAULT",
    "CategorizedFields",
    "FactorySchema",
    "FieldKind",
    "FieldShape",
    "FieldSpec",
    "FkDescriptor",
    "categorize",
    "field_shape",
    "fk",
    "parse_factory",
    "parse_factory_header",
    "parse_field_attributes",
    "pk",
    "required",
]
