"""Word lists used by the tagger and the singular form helper."""

import re

DETERMINERS = frozenset({
    "a", "an", "the", "this", "that", "these", "those", "some", "any",
    "each", "every", "another", "no",
})

POSSESSIVES = frozenset({"my", "your", "his", "her", "its", "our", "their"})

PRONOUNS = frozenset({
    "i", "me", "you", "he", "him", "she", "her", "it", "we", "us", "they",
    "them", "myself", "yourself", "itself",
})

PREPOSITIONS = frozenset({
    "of", "with", "by", "along", "about", "for", "to", "in", "on", "at",
    "from", "into", "onto", "over", "under", "around", "through", "as",
})

QUESTION_WORDS = frozenset({
    "what", "who", "whom", "which", "where", "when", "why", "how",
    "what's", "who's", "where's", "how's",
})

ADJECTIVES = frozenset({
    "good", "great", "bad", "nice", "smart", "clever", "stupid", "dumb",
    "funny", "kind", "cute", "cool", "awesome", "amazing", "excellent",
    "fantastic", "wonderful", "terrible", "horrible", "awful", "brilliant",
    "intelligent", "helpful", "useless", "useful", "lazy", "slow", "fast",
    "quick", "polite", "rude", "friendly", "silly", "weird", "strange",
    "beautiful", "ugly", "happy", "sad", "angry", "boring", "interesting",
    "incredible", "impressive", "obedient", "efficient", "lovely", "perfect",
    "big", "small", "little", "large", "tiny", "huge", "old", "new", "young",
    "red", "green", "blue", "yellow", "black", "white", "gray", "grey",
    "wise", "dear", "sweet", "brave", "honest", "annoying", "nasty",
    "careful", "crazy", "real", "true", "fake", "best", "worst",
})

ADJECTIVE_SUFFIXES = ("ful", "ous", "ive", "able", "ible", "less", "ish", "ical")

# Digits with an optional unit suffix: 2, -2, 1.5, 2m, 50cm, 3'
VALUE_RE = re.compile(r"[-+]?\d+(?:[.,]\d+)?[a-z\"']*")
NUMERIC_RE = re.compile(r"[-+]?\d+(?:\.\d+)?")

IRREGULAR_SINGULARS = {
    "children": "child",
    "people": "person",
    "men": "man",
    "women": "woman",
    "feet": "foot",
    "teeth": "tooth",
    "mice": "mouse",
    "geese": "goose",
    "axes": "axis",
    "vertices": "vertex",
    "indices": "index",
    "matrices": "matrix",
    "wolves": "wolf",
    "knives": "knife",
    "leaves": "leaf",
    "lives": "life",
    "shelves": "shelf",
    "halves": "half",
}


def singularize(word: str) -> str:
    """Return the singular form of an English noun (rule based)."""
    lower = word.lower()
    if lower in IRREGULAR_SINGULARS:
        return IRREGULAR_SINGULARS[lower]
    if len(lower) <= 3:
        return word
    if lower.endswith("ies") and len(lower) > 4:
        return word[:-3] + "y"
    if lower.endswith(("ss", "us", "is")):
        return word
    if lower.endswith(("ches", "shes", "xes", "zes", "sses")):
        return word[:-2]
    if lower.endswith("s"):
        return word[:-1]
    return word
