from .inventory import inventory_rows, render_inventory_markdown
from .samples import SampleRecord, extract_samples, sample_extension

__all__ = ["SampleRecord", "extract_samples", "inventory_rows", "render_inventory_markdown", "sample_extension"]
