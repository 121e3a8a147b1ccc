"""Keyword tables mapping free text onto canonical specialties."""

from __future__ import annotations

import re
from typing import Pattern

from symptom_dialogue.models import Specialty

SPECIALTY_KEYWORDS: dict[Specialty, list[str]] = {
    Specialty.CARDIOLOGY: [
        "cardiology", "cardiologist", "cardiac", "cardiovascular", "heart",
        "chest pain", "palpitation", "hypertension", "blood pressure",
    ],
    Specialty.NEUROLOGY: [
        "neurology", "neurologist", "neurological", "headache", "migraine",
        "seizure", "numbness", "tingling", "stroke", "brain",
    ],
    Specialty.ORTHOPEDICS: [
        "orthopedics", "orthopedic", "orthopaedic", "bone", "joint", "fracture",
        "sprain", "back pain", "knee pain", "shoulder pain",
    ],
    Specialty.GASTROENTEROLOGY: [
        "gastroenterology", "gastroenterologist", "gastrointestinal", "stomach",
        "abdomen", "abdominal", "nausea", "vomiting", "diarrhea", "constipation",
    ],
    Specialty.DERMATOLOGY: [
        "dermatology", "dermatologist", "skin", "rash", "acne", "mole",
        "itching", "dermatitis",
    ],
    Specialty.OPHTHALMOLOGY: [
        "ophthalmology", "ophthalmologist", "eye", "vision", "blurred",
        "red eye", "eye pain",
    ],
    Specialty.ENT: [
        "ent", "otolaryngology", "otolaryngologist", "ear", "nose", "throat",
        "hearing", "sinus", "tonsil",
    ],
    Specialty.PULMONOLOGY: [
        "pulmonology", "pulmonologist", "pulmonary", "respiratory", "lung",
        "breathing", "cough", "asthma", "pneumonia",
    ],
    Specialty.ENDOCRINOLOGY: [
        "endocrinology", "endocrinologist", "diabetes", "thyroid", "hormone",
        "metabolism",
    ],
    Specialty.UROLOGY: [
        "urology", "urologist", "urinary", "bladder", "kidney", "prostate",
    ],
    Specialty.GYNECOLOGY: [
        "gynecology", "gynecologist", "obstetrics", "women", "menstrual",
        "pregnancy", "ovarian",
    ],
    Specialty.PEDIATRICS: [
        "pediatrics", "pediatrician", "child", "baby", "infant", "adolescent",
    ],
    Specialty.EMERGENCY: [
        "emergency", "urgent", "acute", "trauma", "injury",
    ],
    Specialty.INTERNAL: [
        "internal medicine", "general medicine", "primary care", "family medicine",
        "general practitioner",
    ],
}

# Consulted on the patient's complaint when the specialty text names nothing.
SYMPTOM_SPECIALTIES: dict[str, Specialty] = {
    "chest pain": Specialty.CARDIOLOGY,
    "shortness of breath": Specialty.PULMONOLOGY,
    "headache": Specialty.NEUROLOGY,
    "abdominal pain": Specialty.GASTROENTEROLOGY,
    "skin rash": Specialty.DERMATOLOGY,
    "eye problem": Specialty.OPHTHALMOLOGY,
    "ear pain": Specialty.ENT,
    "joint pain": Specialty.ORTHOPEDICS,
    "fever": Specialty.INTERNAL,
    "fatigue": Specialty.INTERNAL,
    "weight loss": Specialty.ENDOCRINOLOGY,
    "urinary problem": Specialty.UROLOGY,
}


def keyword_pattern(keyword: str) -> Pattern[str]:
    """Whole-word pattern tolerating simple plurals ("joint" matches "joints")."""
    words = r"[\s\-]+".join(re.escape(w) for w in keyword.split())
    return re.compile(rf"\b{words}(?:s|es)?\b", re.IGNORECASE)


SPECIALTY_PATTERNS: dict[Specialty, list[Pattern[str]]] = {
    specialty: [keyword_pattern(kw) for kw in keywords]
    for specialty, keywords in SPECIALTY_KEYWORDS.items()
}

SYMPTOM_PATTERNS: list[tuple[Pattern[str], Specialty]] = [
    (keyword_pattern(symptom), specialty) for symptom, specialty in SYMPTOM_SPECIALTIES.items()
]
