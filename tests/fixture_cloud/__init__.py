"""A miniature service tree the builder tests resolve namespaces against."""
