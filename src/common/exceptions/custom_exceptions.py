"""Custom application-wide exceptions."""


class ApplicationError(Exception):
    """Base class for application-specific errors."""

    def __init__(
        self, message: str = "An application error occurred", original_exception: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original error: {self.original_exception})"
        return self.message


class APIError(ApplicationError):
    """Exception raised for errors during external API calls."""

    def __init__(
        self,
        message: str = "API call failed",
        original_exception: Exception | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, original_exception)
        self.status_code = status_code
        self.message = f"API Error: {message}"
        if status_code:
            self.message += f" (Status Code: {status_code})"


class APITimeoutError(APIError):
    """Exception raised when an external API call did not answer within the configured timeout."""

    def __init__(
        self,
        message: str = "API call timed out",
        original_exception: Exception | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message, original_exception)
        self.timeout_seconds = timeout_seconds
        self.message = f"API Timeout: {message}"
        if timeout_seconds:
            self.message += f" (Timeout: {timeout_seconds}s)"


class PersistenceError(ApplicationError):
    """Exception raised for errors while loading or saving the inventory state."""

    def __init__(self, message: str = "Persistence operation failed", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Persistence Error: {message}"


class InvalidItemError(ApplicationError):
    """Exception raised when item fields cannot be turned into a valid inventory item."""

    def __init__(self, message: str = "Invalid item data", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Invalid Item: {message}"


class SkuConflictError(ApplicationError):
    """Exception raised when an item would share its SKU with another item."""

    def __init__(self, sku: str, existing_item_id: str | None = None) -> None:
        message = f"SKU '{sku}' is already used"
        if existing_item_id:
            message += f" by item {existing_item_id}"
        super().__init__(message)
        self.sku = sku
        self.existing_item_id = existing_item_id


class PurchaseOrderError(ApplicationError):
    """Exception raised when a purchase order cannot be previewed or committed."""

    def __init__(self, message: str = "Purchase order operation failed", original_exception: Exception | None = None) -> None:
        super().__init__(message, original_exception)
        self.message = f"Purchase Order Error: {message}"
