from decimal import Decimal

from pydantic import BaseModel, condecimal, model_validator


# Montos y cantidades: Numeric(10, 2) en la base
Money = condecimal(ge=0, max_digits=10, decimal_places=2)
Quantity = condecimal(gt=0, max_digits=10, decimal_places=2)
Stock = condecimal(max_digits=10, decimal_places=2)

CENTS = Decimal("0.01")


class PatchModel(BaseModel):
    """Base de los schemas de actualización parcial: solo campos editables, al menos uno"""

    @model_validator(mode="before")
    @classmethod
    def validar_datos(cls, data):
        if isinstance(data, dict) and data:
            return data
        raise ValueError("Se requiere al menos un campo para actualizar")

    def changes(self) -> dict:
        # null equivale a "sin cambios"
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}
