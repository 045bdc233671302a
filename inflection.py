"""Project flat inflection records onto a case/number or person/number table."""
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from log import get_logger

from models import Feature, Inflection, InflectionRow

logger = get_logger("grammr.inflection")

NUMBER = "NUMBER"
SINGULAR = "SING"
PLURAL = "PLUR"


class FeaturePolicy(NamedTuple):
    """Row key of the table: a feature type and its values in display order."""
    feature_type: str
    values: Tuple[str, ...]


CASE_POLICY = FeaturePolicy("CASE", ("NOM", "GEN", "DAT", "ACC", "ABL", "LOC"))
VERB_POLICY = FeaturePolicy("PERSON", ("FIRST", "SECOND", "THIRD"))

PART_OF_SPEECH_POLICIES: Dict[str, FeaturePolicy] = {
    "NOUN": CASE_POLICY,
    "ADJ": CASE_POLICY,
}


def policy_for(part_of_speech: str) -> FeaturePolicy:
    """Anything not listed, including unknown tags, gets the verb policy."""
    policy = PART_OF_SPEECH_POLICIES.get(part_of_speech)
    if policy is None:
        if part_of_speech != "VERB":
            logger.debug(
                "No inflection policy for part of speech, using person/number",
                extra={"component": "inflection", "detail": part_of_speech},
            )
        return VERB_POLICY
    return policy


def has_features(inflection: Inflection, required: Iterable[Feature]) -> bool:
    """True if every required (type, value) pair appears on the record."""
    return all(
        any(f.type == req.type and f.value == req.value for f in inflection.features)
        for req in required
    )


def find_inflection(inflections: List[Inflection], features: List[Feature]) -> Optional[Inflection]:
    for inflection in inflections:
        if has_features(inflection, features):
            return inflection
    return None


def _inflected_form(inflections: List[Inflection], feature_type: str, value: str, number: str) -> str:
    match = find_inflection(inflections, [
        Feature(type=feature_type, value=value),
        Feature(type=NUMBER, value=number),
    ])
    return match.inflected if match else ""


def organize_inflection_table(part_of_speech: str, inflections: List[Inflection]) -> Dict[str, InflectionRow]:
    """Build the singular/plural table for a lemma.

    Rows follow the policy's value order. A row is kept only if at least one
    of its two cells was found.
    """
    policy = policy_for(part_of_speech)
    table: Dict[str, InflectionRow] = {}
    for value in policy.values:
        row = InflectionRow(
            singular=_inflected_form(inflections, policy.feature_type, value, SINGULAR),
            plural=_inflected_form(inflections, policy.feature_type, value, PLURAL),
        )
        if row.singular or row.plural:
            table[value] = row
    return table
