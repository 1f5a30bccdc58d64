from .catalog import list_schemas, schema_path_for
from .validate import validate, validate_file

__all__ = ["list_schemas", "schema_path_for", "validate", "validate_file"]
