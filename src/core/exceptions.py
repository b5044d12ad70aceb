"""Custom exceptions for the reference lookup service.

All exceptions are namespaced under CiteError and carry a machine-readable
error code that the API layer returns verbatim.
"""


class CiteError(Exception):
    """Base exception for all reference lookup errors.

    Attributes:
        code: Machine-readable error code
    """

    code: str = "citeerror"

    def __init__(self, message: str, code: str | None = None) -> None:
        """Initialize cite error.

        Args:
            message: Error description
            code: Overrides the class-level error code
        """
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(message)


class FeatureDisabledError(CiteError):
    """Raised when reference storage is disabled in site configuration."""

    code = "citestoragedisabled"

    def __init__(
        self,
        message: str = "Cite extension reference storage is not enabled",
        flag: str = "reference_storage_enabled",
    ) -> None:
        self.flag = flag
        super().__init__(message)


class InvalidContinuationError(CiteError):
    """Raised when a continuation token is not an integer-formatted string.

    Attributes:
        value: The rejected token
    """

    code = "badcontinue"

    def __init__(self, value: str, parameter: str = "rfcontinue") -> None:
        self.value = value
        self.parameter = parameter
        super().__init__(
            f"Invalid continue param {parameter}={value!r}. "
            "You should pass the original value returned by the previous query."
        )


class ReferenceStoreError(CiteError):
    """Raised when a reference store backend cannot be read.

    Attributes:
        page_id: Page whose references were being fetched
        status_code: HTTP status code if applicable
    """

    code = "referencestoreerror"

    def __init__(
        self,
        message: str,
        page_id: int | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.page_id = page_id
        self.status_code = status_code
        if cause:
            self.__cause__ = cause
        super().__init__(message)
