# eyecare/intake/stages.py
from enum import IntEnum


class WizardStep(IntEnum):
    SYMPTOMS = 0
    AFFECTED_EYE = 1
    OCULAR_HISTORY = 2
    MEDICAL_CONDITIONS = 3
    IMAGE_UPLOAD = 4
    DIAGNOSIS = 5
