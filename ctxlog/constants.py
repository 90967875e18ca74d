"""Literals shared by the resolution engine and the message formatter."""

SINGLE_PROPERTY = "value"

DEFAULT_KEY_NAME = "key"
CONTEXT_PREFIX = "ctx:{"
CONTEXT_SUFFIX = "}"
MESSAGE_SEPARATOR = ". "
SEGMENT_SEPARATOR = ", "

ENTRY_ARROW = "() -- >"
EXIT_ARROW = "() < --"
