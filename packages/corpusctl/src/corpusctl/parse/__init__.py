from .dates import parse_date
from .document import parse_document
from .frontmatter import Header, split_header
from .markdown import BodyScan, scan_body, slugify

__all__ = ["BodyScan", "Header", "parse_date", "parse_document", "scan_body", "slugify", "split_header"]
