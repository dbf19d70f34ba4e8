# eyecare/intake/catalog.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from eyecare.intake.errors import UnknownCategoryError

OTHERS_ID = "others"

SYMPTOMS = "symptoms"
EYES = "eyes"
OCULAR_HISTORY = "ocular-history"
MEDICAL_CONDITIONS = "medical-conditions"


@dataclass(frozen=True)
class Option:
    id: str
    label: str
    emoji: str


PREDEFINED: Dict[str, List[Option]] = {
    SYMPTOMS: [
        Option("redness", "Redness", "🔴"),
        Option("dryness", "Dry Eyes", "🏜️"),
        Option("sensitivity", "Light Sensitivity", "🔆"),
        Option("blurred", "Blurred Vision", "🌫️"),
        Option("pain", "Eye Pain", "😣"),
        Option("itching", "Itching", "🤏"),
        Option("tearing", "Excessive Tearing", "💧"),
        Option("floaters", "Floaters", "🕸️"),
        Option("headache", "Headache", "🤕"),
        Option("burning", "Burning Sensation", "🔥"),
        Option("discharge", "Discharge", "💦"),
        Option("swelling", "Swelling", "🎈"),
        Option(OTHERS_ID, "Others", "🔍"),
    ],
    EYES: [
        Option("left", "Left Eye", "👁️"),
        Option("right", "Right Eye", "👁️"),
        Option("both", "Both Eyes", "👀"),
    ],
    OCULAR_HISTORY: [
        Option("surgery", "Eye Surgery", "🔪"),
        Option("spectacles", "Wears Spectacles", "👓"),
        Option("glaucoma", "Glaucoma", "🔵"),
        Option("cataract", "Cataract", "🌫️"),
        Option("lasik", "LASIK", "🔬"),
        Option(OTHERS_ID, "Others", "🔍"),
    ],
    MEDICAL_CONDITIONS: [
        Option("diabetes", "Diabetes", "🍬"),
        Option("hypertension", "Hypertension", "🩺"),
        Option("arthritis", "Arthritis", "🦴"),
        Option("thyroid", "Thyroid Disease", "🦋"),
        Option("autoimmune", "Autoimmune Disorder", "🛡️"),
        Option("migraine", "Migraine", "🤕"),
        Option("asthma", "Asthma", "🫁"),
        Option("ulcer", "Ulcer", "🔴"),
        Option(OTHERS_ID, "Others", "🔍"),
    ],
}

# Free-text search vocabulary shown behind the "Others" option.
SUGGESTIONS: Dict[str, List[str]] = {
    SYMPTOMS: [
        "Redness", "Dry Eyes", "Light Sensitivity", "Blurred Vision", "Eye Pain",
        "Itching", "Excessive Tearing", "Floaters", "Headache", "Burning Sensation",
        "Discharge", "Swelling", "Double Vision", "Eye Strain", "Color Blindness",
        "Night Blindness", "Flashes of Light", "Halos Around Lights", "Eye Twitching",
        "Loss of Peripheral Vision", "Cloudy Vision", "Eye Fatigue", "Sensitivity to Glare",
        "Cataracts", "Glaucoma", "Diabetic Retinopathy", "Macular Degeneration",
        "Conjunctivitis", "Stye", "Blepharitis", "Uveitis", "Optic Neuritis",
        "Retinal Detachment", "Corneal Ulcer", "Ocular Migraine", "Astigmatism",
        "Myopia", "Hyperopia", "Presbyopia", "Amblyopia", "Strabismus",
        "Ocular Hypertension", "Retinitis Pigmentosa", "Keratoconus", "Pterygium",
        "Ocular Herpes", "Optic Nerve Damage", "Iritis", "Scleritis", "Orbital Cellulitis",
    ],
    EYES: [],
    OCULAR_HISTORY: [
        "Dry Eyes", "Eye Strain", "Floaters", "Glaucoma", "Cataract",
        "Retinal Detachment", "Macular Degeneration", "Uveitis",
        "Optic Neuritis", "Conjunctivitis", "Keratitis", "Blepharitis",
        "Stye", "Pterygium", "Color Blindness", "Night Blindness",
        "Double Vision", "Dry Eye Syndrome", "Visual Disturbance",
        "Eye Allergy", "Eye Injury", "Contact Lens Issues",
        "Ocular Migraines", "Eye Fatigue", "Photophobia",
        "Eye Twitch", "Vision Loss", "Ocular Hypertension",
        "Retinitis Pigmentosa", "Chemical Burn", "Eye Tumor",
        "Chronic Dry Eye",
    ],
    MEDICAL_CONDITIONS: [
        "Chronic Obstructive Pulmonary Disease (COPD)", "Alzheimer's Disease",
        "Multiple Sclerosis", "Rheumatoid Arthritis", "Lupus", "Sjögren's Syndrome",
        "Psoriasis", "Crohn's Disease", "Ulcerative Colitis", "Heart Disease",
        "High Cholesterol", "Chronic Kidney Disease", "Sickle Cell Disease",
        "HIV/AIDS", "Parkinson's Disease", "Stroke", "Sarcoidosis",
        "Graves' Disease", "Hypothyroidism", "Epilepsy", "Cancer", "Obesity",
        "Sleep Apnea", "Allergies", "Eczema",
    ],
}


def _check_category(category: str) -> None:
    if category not in PREDEFINED:
        raise UnknownCategoryError(category)


def options_for(category: str) -> List[Option]:
    _check_category(category)
    return list(PREDEFINED[category])


def option_ids(category: str) -> List[str]:
    return [o.id for o in options_for(category)]


def label_for(category: str, option_id: str) -> str:
    """
    Label of a predefined option, or the value itself for custom entries.
    """
    for option in options_for(category):
        if option.id == option_id:
            return option.label
    return option_id


def suggest(category: str, query: str) -> List[str]:
    """
    Case-insensitive substring search over the category's vocabulary.
    A blank query yields no suggestions.
    """
    _check_category(category)
    needle = query.strip().lower()
    if not needle:
        return []
    return [s for s in SUGGESTIONS[category] if needle in s.lower()]
