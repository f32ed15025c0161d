from __future__ import annotations

import logging
from typing import Dict, List

from travana.ai.translation import translate_with_openai
from travana.api.models.schemas import Language, Phrase, PhraseBookSection, TranslationResult
from travana.external import google_translate_api

logger = logging.getLogger(__name__)

FALLBACK_DICTIONARY: Dict[str, Dict[str, str]] = {
    "es": {"hello": "hola", "thank you": "gracias", "goodbye": "adiós", "please": "por favor", "yes": "sí", "no": "no"},
    "fr": {
        "hello": "bonjour",
        "thank you": "merci",
        "goodbye": "au revoir",
        "please": "s'il vous plaît",
        "yes": "oui",
        "no": "non",
    },
    "de": {"hello": "hallo", "thank you": "danke", "goodbye": "auf wiedersehen", "please": "bitte", "yes": "ja", "no": "nein"},
}

# category -> [(english, translated, pronunciation)]
_PHRASES = {
    "es": {
        "Greetings": [
            ("Hello", "Hola", "OH-lah"),
            ("Good morning", "Buenos días", "BWEH-nohs DEE-ahs"),
            ("Good evening", "Buenas noches", "BWEH-nahs NOH-chehs"),
            ("Thank you", "Gracias", "GRAH-see-ahs"),
            ("You're welcome", "De nada", "deh NAH-dah"),
        ],
        "Directions": [
            ("Where is...?", "¿Dónde está...?", "DOHN-deh ehs-TAH"),
            ("How do I get to...?", "¿Cómo llego a...?", "KOH-moh YEH-goh ah"),
            ("Left", "Izquierda", "ees-kee-EHR-dah"),
            ("Right", "Derecha", "deh-REH-chah"),
            ("Straight ahead", "Derecho", "deh-REH-choh"),
        ],
        "Food & Dining": [
            ("I would like...", "Me gustaría...", "meh goos-tah-REE-ah"),
            ("The bill, please", "La cuenta, por favor", "lah KWEHN-tah pohr fah-VOHR"),
            ("Delicious", "Delicioso", "deh-lee-see-OH-soh"),
            ("Water", "Agua", "AH-gwah"),
            ("Coffee", "Café", "kah-FEH"),
        ],
    },
    "fr": {
        "Greetings": [
            ("Hello", "Bonjour", "bohn-ZHOOR"),
            ("Good morning", "Bonjour", "bohn-ZHOOR"),
            ("Good evening", "Bonsoir", "bohn-SWAHR"),
            ("Thank you", "Merci", "mehr-SEE"),
            ("You're welcome", "De rien", "duh RYEHN"),
        ],
        "Directions": [
            ("Where is...?", "Où est...?", "oo eh"),
            ("How do I get to...?", "Comment aller à...?", "koh-MAHN ah-LAY ah"),
            ("Left", "Gauche", "gohsh"),
            ("Right", "Droite", "drwaht"),
            ("Straight ahead", "Tout droit", "too drwah"),
        ],
        "Food & Dining": [
            ("I would like...", "Je voudrais...", "zhuh voo-DREH"),
            ("The bill, please", "L'addition, s'il vous plaît", "lah-dee-SYOHN seel voo pleh"),
            ("Delicious", "Délicieux", "day-lee-SYUH"),
            ("Water", "Eau", "oh"),
            ("Coffee", "Café", "kah-FAY"),
        ],
    },
    "de": {
        "Greetings": [
            ("Hello", "Hallo", "HAH-loh"),
            ("Good morning", "Guten Morgen", "GOO-ten MOR-gen"),
            ("Good evening", "Guten Abend", "GOO-ten AH-bent"),
            ("Thank you", "Danke", "DAHN-kuh"),
            ("You're welcome", "Bitte", "BIT-tuh"),
        ],
        "Directions": [
            ("Where is...?", "Wo ist...?", "voh ist"),
            ("How do I get to...?", "Wie komme ich zu...?", "vee KOM-muh ikh tsoo"),
            ("Left", "Links", "links"),
            ("Right", "Rechts", "rekhts"),
            ("Straight ahead", "Geradeaus", "geh-RAH-duh-ows"),
        ],
        "Food & Dining": [
            ("I would like...", "Ich möchte...", "ikh MURKH-tuh"),
            ("The bill, please", "Die Rechnung, bitte", "dee REKH-nung BIT-tuh"),
            ("Delicious", "Lecker", "LEK-ker"),
            ("Water", "Wasser", "VAH-ser"),
            ("Coffee", "Kaffee", "KAH-fay"),
        ],
    },
}

SUPPORTED_LANGUAGES = [
    ("en", "English"),
    ("es", "Spanish"),
    ("fr", "French"),
    ("de", "German"),
    ("it", "Italian"),
    ("pt", "Portuguese"),
    ("ru", "Russian"),
    ("ja", "Japanese"),
    ("ko", "Korean"),
    ("zh", "Chinese"),
    ("ar", "Arabic"),
    ("hi", "Hindi"),
]


def fallback_translation(text: str, target_language: str, source_language: str = "auto") -> TranslationResult:
    translated = FALLBACK_DICTIONARY.get(target_language, {}).get(text.lower(), text)
    return TranslationResult(
        originalText=text,
        translatedText=translated,
        sourceLanguage="en" if source_language == "auto" else source_language,
        targetLanguage=target_language,
        confidence=0.8,
    )


class TranslationService:
    async def translate_text(self, text: str, target_language: str, source_language: str = "auto") -> TranslationResult:
        """Google Translate, then the chat model, then the phrase dictionary."""
        google = await google_translate_api.translate(text, target_language, source_language)
        if google and google.get("translatedText") is not None:
            return TranslationResult(
                originalText=text,
                translatedText=google["translatedText"],
                sourceLanguage=google.get("detectedSourceLanguage") or source_language,
                targetLanguage=target_language,
                confidence=0.95,
            )

        translated = await translate_with_openai(text, target_language, source_language)
        if translated is not None:
            return TranslationResult(
                originalText=text,
                translatedText=translated,
                sourceLanguage="en" if source_language == "auto" else source_language,
                targetLanguage=target_language,
                confidence=0.9,
            )

        logger.info("No translation provider available; using dictionary fallback")
        return fallback_translation(text, target_language, source_language)

    async def detect_language(self, text: str) -> str:
        return await google_translate_api.detect(text) or "en"

    def get_phrase_book(self, language: str) -> List[PhraseBookSection]:
        sections = _PHRASES.get(language) or _PHRASES["es"]
        return [
            PhraseBookSection(
                category=category,
                phrases=[Phrase(english=en, translated=tr, pronunciation=pron) for en, tr, pron in phrases],
            )
            for category, phrases in sections.items()
        ]

    def get_supported_languages(self) -> List[Language]:
        return [Language(code=code, name=name) for code, name in SUPPORTED_LANGUAGES]
