from pydantic import BaseModel, Field, model_validator
from typing import Optional


class StandortIn(BaseModel):
    ort: str = Field(pattern=r"^\w.*", max_length=40, examples=["Karlsruhe"])
    plz: Optional[str] = Field(None, pattern=r"^\d{4,5}$", examples=["76133"])
    strasse: Optional[str] = Field(None, max_length=64, examples=["Hauptstrasse 5"])
    land: Optional[str] = Field(None, max_length=40, examples=["Deutschland"])
    details: Optional[str] = Field(None, max_length=128)


class StandortUpdateIn(BaseModel):
    ort: Optional[str] = Field(None, pattern=r"^\w.*", max_length=40)
    plz: Optional[str] = Field(None, pattern=r"^\d{4,5}$")
    strasse: Optional[str] = Field(None, max_length=64)
    land: Optional[str] = Field(None, max_length=40)
    details: Optional[str] = Field(None, max_length=128)

    @model_validator(mode="after")
    def ort_not_null(self):
        if "ort" in self.model_fields_set and self.ort is None:
            raise ValueError("ort must not be null")
        return self


class StandortOut(BaseModel):
    ort: str
    plz: Optional[str] = None
    strasse: Optional[str] = None
    land: Optional[str] = None
    details: Optional[str] = None

    class Config:
        from_attributes = True
