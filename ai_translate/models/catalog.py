"""
String Catalog - In-memory model of an .xcstrings localization catalog

Unknown fields (e.g. `version`, `extractionState`, `variations`) are kept as
model extras so a load/save round-trip never drops data we do not touch.
"""

from pydantic import BaseModel, Field
from typing import Dict, Iterator, Optional, Tuple

from .unit_state import UnitState, is_completed_state


class StringUnit(BaseModel):
    """Single string value with its translation state"""

    state: Optional[str] = Field(default=None, description="Unit state (new, translated, error, ...); absent means never translated")
    value: str = Field(default="", description="Source, translated, or empty text")

    class Config:
        extra = "allow"
        json_schema_extra = {
            "example": {"state": "translated", "value": "Hallo"}
        }

    @classmethod
    def translated(cls, value: str) -> "StringUnit":
        return cls(state=UnitState.TRANSLATED.value, value=value)

    @classmethod
    def failed(cls) -> "StringUnit":
        return cls(state=UnitState.ERROR.value, value="")


class LocalizationUnit(BaseModel):
    """One language's translation of one catalog entry"""

    string_unit: Optional[StringUnit] = Field(
        default=None,
        alias="stringUnit",
        description="Plain string value (absent for plural/device variations)"
    )

    class Config:
        extra = "allow"
        populate_by_name = True
        json_schema_extra = {
            "example": {"stringUnit": {"state": "translated", "value": "Bonjour"}}
        }

    @property
    def has_translation(self) -> bool:
        """A value is present and its state marks it as completed"""
        if self.string_unit is None:
            return False
        return bool(self.string_unit.value) and is_completed_state(self.string_unit.state)

    @property
    def is_supported_format(self) -> bool:
        """Only a single string value; no variations/substitutions sub-structure"""
        return not self.model_extra

    @classmethod
    def from_result(cls, translation: Optional[str]) -> "LocalizationUnit":
        """Fresh unit for a translation result (None means the request failed)"""
        if translation is None:
            return cls(string_unit=StringUnit.failed())
        return cls(string_unit=StringUnit.translated(translation))


class LocalizationGroup(BaseModel):
    """Catalog entry - all localizations of one translatable string"""

    comment: Optional[str] = Field(default=None, description="Developer comment, passed as context")
    localizations: Optional[Dict[str, LocalizationUnit]] = Field(
        default=None,
        description="Language code -> unit"
    )

    class Config:
        extra = "allow"
        json_schema_extra = {
            "example": {
                "comment": "Greeting on the welcome screen",
                "localizations": {
                    "de": {"stringUnit": {"state": "translated", "value": "Hallo"}}
                }
            }
        }

    def unit_for(self, language: str) -> Optional[LocalizationUnit]:
        if not self.localizations:
            return None
        return self.localizations.get(language)


class StringCatalog(BaseModel):
    """Whole .xcstrings document"""

    source_language: str = Field(..., alias="sourceLanguage", description="Language of the keys")
    strings: Dict[str, LocalizationGroup] = Field(
        default_factory=dict,
        description="Entry key -> group, in file order"
    )

    class Config:
        extra = "allow"
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "sourceLanguage": "en",
                "strings": {"Hello": {}},
                "version": "1.0"
            }
        }

    def entries(self) -> Iterator[Tuple[str, LocalizationGroup]]:
        """Iterate (key, group) pairs in catalog order"""
        return iter(self.strings.items())

    def to_json_dict(self) -> dict:
        """Serializable dict using the on-disk field names"""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
