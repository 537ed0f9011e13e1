from api.routers import health, instruments, orders, portfolio

__all__ = ["health", "instruments", "orders", "portfolio"]
