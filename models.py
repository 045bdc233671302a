"""Pydantic schemas, constants, and static data for grammr."""
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, computed_field

# --- Constants ---
SUPPORTED_LANGUAGES = {
    "en": "English",
    "de": "German",
    "ru": "Russian",
    "fr": "French",
    "es": "Spanish",
    "it": "Italian",
    "ja": "Japanese",
    "zh": "Chinese",
}

MAX_INPUT_LEN = 500


def language_name(code: str) -> str:
    return SUPPORTED_LANGUAGES.get(code, code)


def capitalize(s: Optional[str]) -> str:
    """'NOUN' -> 'Noun'. Non-strings become an empty string."""
    if not isinstance(s, str):
        return ""
    return s[:1].upper() + s[1:].lower()


# --- Token / morphology values ---

class Feature(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    value: str
    fullIdentifier: str = ""


class TokenMorphology(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = ""
    lemma: str = ""
    pos: str = ""
    features: List[Feature] = []

    def stringify_features(self) -> str:
        return ", ".join(f"{capitalize(f.type)}: {capitalize(f.value)}" for f in self.features)

    @computed_field
    @property
    def featureSummary(self) -> str:
        return self.stringify_features()


class TokenTranslation(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str = ""
    translation: str = ""


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    morphology: TokenMorphology = TokenMorphology()
    translation: TokenTranslation = TokenTranslation()


def synthetic_token(text: str) -> Token:
    """Filler token for punctuation recovered from the literal text."""
    return Token(text=text, morphology=TokenMorphology(), translation=TokenTranslation())


# --- Analysis (translation) ---

class SemanticTranslation(BaseModel):
    model_config = ConfigDict(frozen=True)

    sourcePhrase: str = ""
    translatedPhrase: str


class Analysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    sourcePhrase: str
    semanticTranslation: SemanticTranslation
    analyzedTokens: List[Token] = []


class AnalysisRequest(BaseModel):
    phrase: str
    userLanguageSpoken: str = "en"
    userLanguageLearned: str = "de"
    performSemanticTranslation: bool = True


class AlignRequest(BaseModel):
    text: str
    tokens: List[Token] = []


# --- Inflections ---

class Inflection(BaseModel):
    model_config = ConfigDict(frozen=True)

    lemma: str = ""
    inflected: str
    features: List[Feature] = []


class Inflections(BaseModel):
    model_config = ConfigDict(frozen=True)

    lemma: str = ""
    partOfSpeech: str = ""
    inflections: List[Inflection] = []


class InflectionsRequest(BaseModel):
    token: Token
    languageCode: str


class InflectionRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    singular: str = ""
    plural: str = ""


class InflectionTableRequest(BaseModel):
    partOfSpeech: str
    inflections: List[Inflection] = []


class InflectionTableResponse(BaseModel):
    lemma: Optional[str] = None
    partOfSpeech: str
    table: Dict[str, InflectionRow]


# --- Static Data ---

# Served by analysis_client.fetch_analysis when GRAMMR_MOCK_BACKEND=1.
MOCK_ANALYSIS = {
    "semanticTranslation": {
        "sourcePhrase": "wie geht es dir?",
        "translatedPhrase": "Как дела?",
    },
    "analyzedTokens": [
        {
            "text": "Как",
            "translation": {"source": "как", "translation": "wie"},
            "morphology": {"text": "Как", "lemma": "как", "features": [], "pos": "SCONJ"},
        },
        {
            "text": "дела",
            "translation": {"source": "дела", "translation": "Wie geht's?"},
            "morphology": {
                "text": "дела",
                "lemma": "дело",
                "features": [
                    {"type": "ANIMACY", "value": "INAN", "enumValue": "INAN"},
                    {"type": "CASE", "value": "NOM", "enumValue": "NOM"},
                    {"type": "GENDER", "value": "NEUT", "enumValue": "NEUT"},
                    {"type": "NUMBER", "value": "PLUR", "enumValue": "PLUR"},
                ],
                "pos": "NOUN",
            },
        },
    ],
}
