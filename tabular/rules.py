"""
Deterministic defaults for encoding, decoding and rendering.

Every option a caller can leave out falls back to a value defined here.
"""

DEFAULT_DELIMITER = ","
DEFAULT_QUOTE = '"'
DEFAULT_ESCAPE = "\\"

DEFAULT_ALIGNMENT = "left"
VALID_ALIGNMENTS = ("left", "right", "center")

# Rendered cells are joined by exactly one space, rows by LF.
CELL_SEPARATOR = " "
LINE_SEPARATOR = "\n"

# Delimiter sniffing for uploaded files
SNIFF_SAMPLE_SIZE = 4096
SNIFF_DELIMITERS = (",", ";", "\t", "|")
