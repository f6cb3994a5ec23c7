import enum


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    STOCK_TAKER = "STOCK_TAKER"
