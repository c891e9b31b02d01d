"""
Well-known subtag codes and fixed translation tables.
"""
from types import MappingProxyType

# Sentinels: standard-looking codes whose real value sits in the private-use block.
UNLISTED_LANGUAGE = "qaa"
PRIVATE_USE_SCRIPT = "Qaaa"
PRIVATE_USE_REGION = "QM"

PRIVATE_USE_MARKER = "x"

IPA_VARIANT = "fonipa"
PINYIN_VARIANT = "pinyin"
PHONETIC_PRIVATE_USE = "etic"
PHONEMIC_PRIVATE_USE = "emic"
AUDIO_PRIVATE_USE = "audio"
AUDIO_SCRIPT = "Zxxx"

MANDARIN_ISO3 = "cmn"
CHINESE = "zh"
MAINLAND_CHINA = "CN"

# Private-use variants common enough to carry a display name.
COMMON_PRIVATE_USE_VARIANTS = MappingProxyType({
    PHONETIC_PRIVATE_USE: "Phonetic",
    PHONEMIC_PRIVATE_USE: "Phonemic",
    AUDIO_PRIVATE_USE: "Audio",
})

# ICU variant -> variant codes, in output order.
ICU_VARIANTS = MappingProxyType({
    "IPA": (IPA_VARIANT,),
    "X_ETIC": (IPA_VARIANT, PHONETIC_PRIVATE_USE),
    "X_EMIC": (IPA_VARIANT, PHONEMIC_PRIVATE_USE),
    "EMC": (IPA_VARIANT, PHONEMIC_PRIVATE_USE),
    "X_PY": (PINYIN_VARIANT,),
    "PY": (PINYIN_VARIANT,),
})

ICU_PHONETIC = "X_ETIC"
ICU_PHONEMIC = "X_EMIC"
ICU_IPA = "IPA"
ICU_PINYIN = "X_PY"

# Old ICU locales allowed digits in the language code; the BCP 47 grammar does not.
LEGACY_DIGIT_LETTERS = str.maketrans("0123456789", "abcdefghij")

# Regions outside the QM..QZ / XA..XZ ranges that are reserved for private use.
PRIVATE_USE_REGIONS = frozenset({"AA", "ZZ"})
