# eyecare/intake/wizard.py
from __future__ import annotations

from typing import Dict, List, Optional

from eyecare.intake import catalog
from eyecare.intake.catalog import OTHERS_ID, Option
from eyecare.intake.errors import WizardValidationError
from eyecare.intake.image import decode_data_url
from eyecare.intake.schema import DiagnosisRequest
from eyecare.intake.stages import WizardStep
from eyecare.intake.state import WizardState


class IntakeWizard:
    """
    IntakeWizard drives the linear eye-care intake form.

    Steps:
      - symptoms
      - affected eye
      - ocular history
      - medical conditions
      - image upload
      - diagnosis

    The wizard only manipulates WizardState. Calling the model when the
    patient proceeds past the image step is left to the session service.
    """

    # Steps that refuse to advance until something has been filled in,
    # with the warning shown to the patient.
    REQUIRED_WARNINGS: Dict[WizardStep, str] = {
        WizardStep.AFFECTED_EYE: "Please select an affected eye before proceeding.",
        WizardStep.IMAGE_UPLOAD: "Please upload an image before generating the diagnosis.",
    }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> WizardState:
        return WizardState(step=WizardStep.SYMPTOMS)

    def toggle_symptom(self, state: WizardState, symptom_id: str) -> WizardState:
        known = [o.id for o in self.symptom_options(state)]
        self._toggle(state, catalog.SYMPTOMS, state.selected_symptoms, symptom_id, known)
        return state

    def add_custom_symptom(self, state: WizardState, label: str) -> WizardState:
        """
        Add a typed-in symptom as a new option and select it.

        Labels matching an existing option label (case-insensitive), or whose
        derived id is already taken, are ignored.
        """
        label = label.strip()
        options = self.symptom_options(state)
        taken_labels = {o.label.lower() for o in options}
        taken_ids = {o.id for o in options}
        if label and label.lower() not in taken_labels and label.lower() not in taken_ids:
            option = Option(id=label.lower(), label=label, emoji="🔹")
            state.custom_symptoms.append(option)
            if option.id not in state.selected_symptoms:
                state.selected_symptoms.append(option.id)
        state.show_search[catalog.SYMPTOMS] = False
        return state

    def select_eye(self, state: WizardState, eye_id: str) -> WizardState:
        if eye_id not in catalog.option_ids(catalog.EYES):
            raise WizardValidationError(f"Unknown eye: {eye_id}")
        state.affected_eye = eye_id
        return state

    def toggle_ocular_history(self, state: WizardState, history_id: str) -> WizardState:
        self._toggle(state, catalog.OCULAR_HISTORY, state.ocular_history, history_id)
        return state

    def add_custom_ocular_history(self, state: WizardState, label: str) -> WizardState:
        self._add_custom(state, catalog.OCULAR_HISTORY, state.ocular_history, label)
        return state

    def toggle_medical_condition(self, state: WizardState, condition_id: str) -> WizardState:
        self._toggle(state, catalog.MEDICAL_CONDITIONS, state.medical_conditions, condition_id)
        return state

    def add_custom_medical_condition(self, state: WizardState, label: str) -> WizardState:
        self._add_custom(state, catalog.MEDICAL_CONDITIONS, state.medical_conditions, label)
        return state

    def set_image(self, state: WizardState, data_url: str) -> WizardState:
        """
        Store the uploaded or captured image after checking it decodes.
        Raises InvalidImageError otherwise.
        """
        decode_data_url(data_url)
        state.image_data_url = data_url
        return state

    def proceed(self, state: WizardState) -> WizardState:
        """
        Move to the next step, or raise WizardValidationError (and set
        state.warning) if the current step is incomplete.
        """
        if state.step == WizardStep.DIAGNOSIS:
            raise WizardValidationError("The intake is already complete.")

        warning = self._missing_input_warning(state)
        if warning is not None:
            state.warning = warning
            raise WizardValidationError(warning)

        state.warning = None
        state.step = WizardStep(state.step + 1)
        return state

    def back(self, state: WizardState) -> WizardState:
        if state.step > WizardStep.SYMPTOMS:
            state.step = WizardStep(state.step - 1)
        state.warning = None
        return state

    def restart(self, state: WizardState) -> WizardState:
        fresh = self.start()
        state.__dict__.update(fresh.__dict__)
        return state

    def symptom_options(self, state: WizardState) -> List[Option]:
        return catalog.options_for(catalog.SYMPTOMS) + list(state.custom_symptoms)

    def build_diagnosis_request(self, state: WizardState) -> DiagnosisRequest:
        """
        Turn the collected answers into the payload for the diagnosis relay,
        using human-readable labels for predefined options.
        """
        if state.affected_eye is None:
            raise WizardValidationError(self.REQUIRED_WARNINGS[WizardStep.AFFECTED_EYE])
        if state.image_data_url is None:
            raise WizardValidationError(self.REQUIRED_WARNINGS[WizardStep.IMAGE_UPLOAD])

        custom_labels = {o.id: o.label for o in state.custom_symptoms}
        symptoms = [
            custom_labels.get(s) or catalog.label_for(catalog.SYMPTOMS, s)
            for s in state.selected_symptoms
        ]

        return DiagnosisRequest(
            symptoms=symptoms,
            affected_eye=catalog.label_for(catalog.EYES, state.affected_eye),
            ocular_history=[
                catalog.label_for(catalog.OCULAR_HISTORY, h) for h in state.ocular_history
            ],
            medical_conditions=[
                catalog.label_for(catalog.MEDICAL_CONDITIONS, c)
                for c in state.medical_conditions
            ],
            image_url=state.image_data_url,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _toggle(
        self,
        state: WizardState,
        category: str,
        selected: List[str],
        option_id: str,
        known: Optional[List[str]] = None,
    ) -> None:
        # "Others" opens the search box instead of becoming a selection
        if option_id == OTHERS_ID:
            state.show_search[category] = True
            return

        # Custom ocular history and conditions only live in the selection list
        if known is None:
            known = catalog.option_ids(category)
        if option_id not in selected and option_id not in known:
            raise WizardValidationError(f"Unknown option for {category}: {option_id}")

        if option_id in selected:
            selected.remove(option_id)
        else:
            selected.append(option_id)

    def _add_custom(
        self,
        state: WizardState,
        category: str,
        selected: List[str],
        label: str,
    ) -> None:
        label = label.strip()
        if label and label != OTHERS_ID and label not in selected:
            selected.append(label)
        state.show_search[category] = False

    def _missing_input_warning(self, state: WizardState) -> str | None:
        if state.step == WizardStep.AFFECTED_EYE and not state.affected_eye:
            return self.REQUIRED_WARNINGS[WizardStep.AFFECTED_EYE]
        if state.step == WizardStep.IMAGE_UPLOAD and not state.image_data_url:
            return self.REQUIRED_WARNINGS[WizardStep.IMAGE_UPLOAD]
        return None
