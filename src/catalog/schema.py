from uuid import UUID

from ninja import Field, Schema


# Column limits: CharField(max_length=255), DecimalField(max_digits=10, decimal_places=2)
MAX_NAME_LENGTH = 255
MAX_PRICE = 99_999_999.99


class ProductIn(Schema):
    name: str = Field(max_length=MAX_NAME_LENGTH)
    price: float = Field(ge=-MAX_PRICE, le=MAX_PRICE)
    description: str = ""


class ProductOut(Schema):
    id: UUID
    name: str
    description: str
    price: float


class ErrorOut(Schema):
    error: str
