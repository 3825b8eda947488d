"""Data model, resource requests, failure messages and job selection for a FIFO batch-job scheduler."""

__version__ = "0.1.0"
__all__ = ["constants", "model", "resources", "job_info", "fifo"]