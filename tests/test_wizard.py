# tests/test_wizard.py
import pytest

from eyecare.intake import IntakeWizard, WizardStep, WizardValidationError
from eyecare.intake.errors import InvalidImageError

from .conftest import make_data_url


@pytest.fixture
def wizard():
    return IntakeWizard()


def test_start_state(wizard):
    state = wizard.start()
    assert state.step == WizardStep.SYMPTOMS
    assert state.selected_symptoms == []
    assert state.affected_eye is None
    assert state.diagnosis == ""
    assert state.chat == []


def test_toggle_twice_restores_selection(wizard):
    state = wizard.start()
    wizard.toggle_symptom(state, "redness")
    wizard.toggle_symptom(state, "itching")
    assert state.selected_symptoms == ["redness", "itching"]

    wizard.toggle_symptom(state, "redness")
    assert state.selected_symptoms == ["itching"]

    wizard.toggle_ocular_history(state, "lasik")
    wizard.toggle_ocular_history(state, "lasik")
    assert state.ocular_history == []

    wizard.toggle_medical_condition(state, "diabetes")
    wizard.toggle_medical_condition(state, "diabetes")
    assert state.medical_conditions == []


def test_others_opens_search_without_selecting(wizard):
    state = wizard.start()
    wizard.toggle_symptom(state, "others")
    wizard.toggle_medical_condition(state, "others")
    assert state.selected_symptoms == []
    assert state.medical_conditions == []
    assert state.show_search == {"symptoms": True, "medical-conditions": True}


def test_unknown_symptom_rejected(wizard):
    state = wizard.start()
    with pytest.raises(WizardValidationError):
        wizard.toggle_symptom(state, "sneezing")


def test_custom_symptom_added_once_and_selected(wizard):
    state = wizard.start()
    wizard.toggle_symptom(state, "others")
    wizard.add_custom_symptom(state, "Double Vision")
    assert state.selected_symptoms == ["double vision"]
    assert [o.label for o in state.custom_symptoms] == ["Double Vision"]
    assert state.show_search["symptoms"] is False

    # same label, different case: ignored
    wizard.add_custom_symptom(state, "double VISION")
    # matches a predefined label: ignored
    wizard.add_custom_symptom(state, "redness")
    assert state.selected_symptoms == ["double vision"]
    assert len(state.custom_symptoms) == 1

    # custom options can be toggled like predefined ones
    wizard.toggle_symptom(state, "double vision")
    assert state.selected_symptoms == []


def test_blank_custom_entries_ignored(wizard):
    state = wizard.start()
    wizard.add_custom_symptom(state, "  ")
    wizard.add_custom_ocular_history(state, "")
    wizard.add_custom_medical_condition(state, " ")
    assert state.selected_symptoms == []
    assert state.ocular_history == []
    assert state.medical_conditions == []


def test_custom_history_and_conditions_are_idempotent(wizard):
    state = wizard.start()
    wizard.add_custom_ocular_history(state, "Keratitis")
    wizard.add_custom_ocular_history(state, "Keratitis")
    wizard.add_custom_medical_condition(state, "Lupus")
    wizard.add_custom_medical_condition(state, "Lupus")
    assert state.ocular_history == ["Keratitis"]
    assert state.medical_conditions == ["Lupus"]


def test_select_eye(wizard):
    state = wizard.start()
    wizard.select_eye(state, "both")
    assert state.affected_eye == "both"
    with pytest.raises(WizardValidationError):
        wizard.select_eye(state, "third")


def test_proceed_requires_eye(wizard):
    state = wizard.start()
    wizard.proceed(state)
    assert state.step == WizardStep.AFFECTED_EYE

    with pytest.raises(WizardValidationError):
        wizard.proceed(state)
    assert state.step == WizardStep.AFFECTED_EYE
    assert state.warning == "Please select an affected eye before proceeding."

    wizard.select_eye(state, "left")
    wizard.proceed(state)
    assert state.step == WizardStep.OCULAR_HISTORY
    assert state.warning is None


def test_proceed_requires_image(wizard, png_data_url):
    state = wizard.start()
    wizard.select_eye(state, "right")
    for _ in range(4):
        wizard.proceed(state)
    assert state.step == WizardStep.IMAGE_UPLOAD

    with pytest.raises(WizardValidationError):
        wizard.proceed(state)
    assert state.warning == "Please upload an image before generating the diagnosis."

    wizard.set_image(state, png_data_url)
    wizard.proceed(state)
    assert state.step == WizardStep.DIAGNOSIS

    with pytest.raises(WizardValidationError):
        wizard.proceed(state)


def test_set_image_rejects_garbage(wizard):
    state = wizard.start()
    with pytest.raises(InvalidImageError):
        wizard.set_image(state, "data:image/png;base64,AAAA")
    assert state.image_data_url is None


def test_back_clears_warning_and_stops_at_first_step(wizard):
    state = wizard.start()
    wizard.proceed(state)
    with pytest.raises(WizardValidationError):
        wizard.proceed(state)

    wizard.back(state)
    assert state.step == WizardStep.SYMPTOMS
    assert state.warning is None

    wizard.back(state)
    assert state.step == WizardStep.SYMPTOMS


def test_restart_resets_everything(wizard, png_data_url):
    state = wizard.start()
    wizard.toggle_symptom(state, "pain")
    wizard.add_custom_symptom(state, "Halos Around Lights")
    wizard.select_eye(state, "left")
    wizard.add_custom_ocular_history(state, "Keratitis")
    wizard.toggle_medical_condition(state, "asthma")
    wizard.set_image(state, png_data_url)
    state.diagnosis = "something"
    wizard.proceed(state)

    wizard.restart(state)
    assert state == wizard.start()


def test_build_diagnosis_request_uses_labels(wizard, png_data_url):
    state = wizard.start()
    wizard.toggle_symptom(state, "blurred")
    wizard.add_custom_symptom(state, "Halos Around Lights")
    wizard.select_eye(state, "both")
    wizard.toggle_ocular_history(state, "spectacles")
    wizard.add_custom_ocular_history(state, "Keratitis")
    wizard.toggle_medical_condition(state, "thyroid")
    wizard.set_image(state, png_data_url)

    request = wizard.build_diagnosis_request(state)
    assert request.symptoms == ["Blurred Vision", "Halos Around Lights"]
    assert request.affected_eye == "Both Eyes"
    assert request.ocular_history == ["Wears Spectacles", "Keratitis"]
    assert request.medical_conditions == ["Thyroid Disease"]
    assert request.image_url == png_data_url


def test_build_diagnosis_request_needs_eye_and_image(wizard):
    state = wizard.start()
    with pytest.raises(WizardValidationError):
        wizard.build_diagnosis_request(state)


def test_custom_symptom_can_be_toggled_back_on(wizard):
    state = wizard.start()
    wizard.add_custom_symptom(state, "Eye Twitching")
    wizard.toggle_symptom(state, "eye twitching")
    wizard.toggle_symptom(state, "eye twitching")
    assert state.selected_symptoms == ["eye twitching"]


def test_custom_symptom_matching_predefined_id_is_ignored(wizard):
    state = wizard.start()
    wizard.add_custom_symptom(state, "Pain")
    assert state.custom_symptoms == []
    assert state.selected_symptoms == []

    ids = [o.id for o in wizard.symptom_options(state)]
    assert len(ids) == len(set(ids))

    wizard.toggle_symptom(state, "pain")
    wizard.select_eye(state, "left")
    wizard.set_image(state, make_data_url())
    assert wizard.build_diagnosis_request(state).symptoms == ["Eye Pain"]


def test_unknown_history_and_condition_ids_rejected(wizard):
    state = wizard.start()
    with pytest.raises(WizardValidationError):
        wizard.toggle_ocular_history(state, "cornea transplant")
    with pytest.raises(WizardValidationError):
        wizard.toggle_medical_condition(state, "gout")
    assert state.ocular_history == []
    assert state.medical_conditions == []


def test_custom_history_entry_can_be_toggled_off(wizard):
    state = wizard.start()
    wizard.add_custom_ocular_history(state, "Keratitis")
    wizard.toggle_ocular_history(state, "Keratitis")
    assert state.ocular_history == []
