"""Output and configuration contracts."""
