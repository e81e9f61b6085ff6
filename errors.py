from __future__ import annotations


class SVGRasterError(Exception):
    pass


class DocumentParseError(SVGRasterError):
    pass


class MissingViewBoxError(SVGRasterError):
    """Raised before traversal when the root element has no usable viewBox."""


class MalformedPathError(SVGRasterError):
    """Path data stopped making sense.

    Never leaves ``interpret_path``: the interpreter keeps whatever vertices
    were committed before the offending token.
    """

    def __init__(self, message: str, position: int = -1):
        super().__init__(message)
        self.position = position
