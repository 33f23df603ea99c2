from pydantic import BaseModel


class PaymentStatusOut(BaseModel):
    isPaid: bool
    amount: int
    dueDate: str
    projectName: str
    environment: str
    message: str
