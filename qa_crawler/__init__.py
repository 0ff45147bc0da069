"""qa-crawler — aggregate question/answer pairs from a paginated listing."""

__version__ = "0.1.0"
