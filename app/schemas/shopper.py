from typing import List, Optional, Union
from pydantic import BaseModel, Field, constr, model_validator


class AddToCartRequest(BaseModel):
    product_id: Union[int, str]
    quantity: int = 1


class UpdateCartRequest(BaseModel):
    product_id: Union[int, str]
    quantity: int


class RemoveFromCartRequest(BaseModel):
    product_id: Union[int, str]


class CheckoutRequest(BaseModel):
    address: str = ""
    phone: str = ""
    payment_mode: str = "cod"
    upi_id: Optional[str] = None


class EditProfileRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)


class LanguageRequest(BaseModel):
    language: constr(strip_whitespace=True, to_lower=True, min_length=2, max_length=5)


class TranslationToggleRequest(BaseModel):
    enabled: bool


class TranslateRequest(BaseModel):
    text: Optional[str] = None
    texts: Optional[List[str]] = Field(default=None, max_length=100)
    target: Optional[str] = None
    source: str = "en"

    @model_validator(mode="after")
    def _one_of_text_or_texts(self):
        if self.text is None and not self.texts:
            raise ValueError("text or texts is required")
        return self

    def all_texts(self) -> List[str]:
        return [self.text] if self.text is not None else list(self.texts)
