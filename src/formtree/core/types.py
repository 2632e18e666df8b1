"""
Core type definitions and constants for formtree.

This module contains type aliases and module-level constants shared by the
path parser, the field tree and the violation mapper.
"""

import re

ErrorMapping = dict[str, str]

# Violation paths address child fields as "children[name]" and switch to
# data addressing at the "data" element
CHILDREN_ELEMENT = "children"
DATA_ELEMENT = "data"

# Error mapping source that redirects errors landing on the declaring field
DOT_RULE = "."

FIELD_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_][a-zA-Z0-9_\-:]*$")
