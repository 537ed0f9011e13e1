"""
Core Module - Exceptions.

============================================================
RESPONSIBILITY
============================================================
Defines all custom exceptions for the brokerage backend.

- Provides clear exception hierarchy
- Maps every error kind to an HTTP status
- Includes context for debugging

============================================================
EXCEPTION HIERARCHY
============================================================
BrokerageException (500)
├── ConfigurationError
│   └── InvalidConfigError
├── InvalidRequestError (400)
│   ├── OrderValidationError
│   └── OrderSizingError
├── NotFoundError (404)
│   ├── UserNotFoundError
│   ├── InstrumentNotFoundError
│   └── MarketDataNotFoundError
└── DataCorruptionError (400)

Business rejections (insufficient cash / holdings) are NOT
exceptions. They end as a persisted REJECTED order.

============================================================
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


# ============================================================
# BASE EXCEPTION
# ============================================================

class BrokerageException(Exception):
    """
    Base exception for all brokerage errors.

    All exceptions carry:
    - status_code: HTTP status surfaced at the API boundary
    - context: for debugging
    - timestamp: when the error occurred
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

        if cause:
            self.context["cause_type"] = type(cause).__name__
            self.context["cause_message"] = str(cause)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for logging/storage."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "status": self.status_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }

    def to_log_format(self) -> str:
        """Format exception for structured logging."""
        ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        line = f"{type(self).__name__}: {self.message} | status={self.status_code}"
        return f"{line} | {ctx_str}" if ctx_str else line


# ============================================================
# CONFIGURATION ERRORS
# ============================================================

class ConfigurationError(BrokerageException):
    """Error in configuration."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        actual_value: Optional[Any] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if config_key:
            context["config_key"] = config_key
        if actual_value is not None:
            context["actual_value"] = str(actual_value)[:100]

        super().__init__(message, context=context, **kwargs)


class InvalidConfigError(ConfigurationError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            message=f"Invalid configuration for {key}: {reason}",
            config_key=key,
            actual_value=value,
            context={"reason": reason},
        )


# ============================================================
# REQUEST ERRORS
# ============================================================

class InvalidRequestError(BrokerageException):
    """Client-caused error. Never persisted, surfaced as 400."""

    status_code = 400


class OrderValidationError(InvalidRequestError):
    """An order request violated a request-level rule."""

    def __init__(self, message: str, field: Optional[str] = None):
        context = {"field": field} if field else {}
        super().__init__(message, context=context)
        self.field = field


class OrderSizingError(InvalidRequestError):
    """The requested amount buys zero shares at the execution price."""

    def __init__(self, amount: Any, price: Any):
        super().__init__(
            "amount too small to execute at current price",
            context={"amount": str(amount), "price": str(price)},
        )


# ============================================================
# NOT FOUND ERRORS
# ============================================================

class NotFoundError(BrokerageException):
    """A referenced entity does not exist."""

    status_code = 404


class UserNotFoundError(NotFoundError):

    def __init__(self, user_id: Any):
        super().__init__(
            f"User with id {user_id} not found",
            context={"user_id": user_id},
        )
        self.user_id = user_id


class InstrumentNotFoundError(NotFoundError):

    def __init__(self, ticker: Any):
        super().__init__(
            f"Instrument with ticker {ticker} not found",
            context={"ticker": ticker},
        )
        self.ticker = ticker


class MarketDataNotFoundError(NotFoundError):

    def __init__(self, instrument_id: Any):
        super().__init__(
            f"Market data for instrument {instrument_id} not found",
            context={"instrument_id": instrument_id},
        )
        self.instrument_id = instrument_id


# ============================================================
# DATA INTEGRITY ERRORS
# ============================================================

class DataCorruptionError(BrokerageException):
    """
    The filled-order ledger is internally inconsistent.

    Raised when replayed holdings for an instrument go negative
    and the portfolio is configured to fail on corruption.
    """

    status_code = 400

    def __init__(self, ticker: str, quantity: int):
        super().__init__(
            f"Inconsistent trades detected for instrument {ticker} please check data source",
            context={"ticker": ticker, "quantity": quantity},
        )
        self.ticker = ticker
        self.quantity = quantity
