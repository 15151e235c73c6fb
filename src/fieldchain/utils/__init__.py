"""
Contains some useful utility functions used by the chains and the builder.
"""
from .casing import is_camel_or_pascal_case, split_words, to_description, to_snake_case
from .request_fields import location_container, read_field, write_field
