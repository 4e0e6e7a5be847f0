"""docshare: shared documents with tag-cascaded access control and query search."""
