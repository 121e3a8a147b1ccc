"""Flash mode: one completion, no follow-up questions.

For patients in a hurry. The complaint goes straight into the flash prompt
and the response is parsed exactly like a dialogue assessment.
"""

from __future__ import annotations

import logging

from symptom_dialogue.completion.protocols import ICompletionProvider
from symptom_dialogue.core.config import SummaryConfig
from symptom_dialogue.exceptions import CompletionUnavailable, UnparseableSummary
from symptom_dialogue.models import Assessment
from symptom_dialogue.prompts.builders import build_flash_prompt
from symptom_dialogue.summary.assessment import build_assessment, find_error_marker
from symptom_dialogue.summary.parser import SummaryParser
from symptom_dialogue.summary.specialty import SpecialtyExtractor

log = logging.getLogger(__name__)


class FlashAssessmentService:
    def __init__(
        self,
        completion: ICompletionProvider,
        config: SummaryConfig | None = None,
        extractor: SpecialtyExtractor | None = None,
    ) -> None:
        self._completion = completion
        self._config = config or SummaryConfig()
        self._parser = SummaryParser(
            min_section_chars=self._config.min_section_chars,
            fallback_section_type=self._config.fallback_section_type,
        )
        self._extractor = extractor or SpecialtyExtractor()

    async def assess(self, complaint: str) -> Assessment:
        """Assess ``complaint`` in a single call.

        Raises:
            ValueError: if the complaint is blank.
            CompletionUnavailable: the call failed or returned an error text;
                retrying with the same complaint is safe.
        """
        complaint = complaint.strip()
        if not complaint:
            raise ValueError("Complaint must not be empty")

        try:
            text = await self._completion.complete(build_flash_prompt(complaint))
        except Exception as e:
            log.error("Flash assessment failed (%s: %s)", type(e).__name__, e)
            raise CompletionUnavailable(f"Assessment service unavailable: {e}") from e

        marker = find_error_marker(
            text, self._config.error_markers, whole_words=self._config.error_marker_whole_words
        )
        if marker is not None:
            log.error("Flash assessment response looks like an error (%r)", marker)
            raise CompletionUnavailable(f"Assessment service returned an error: {text[:200]}")

        try:
            assessment = build_assessment(
                text,
                complaint,
                parser=self._parser,
                extractor=self._extractor,
                fallback_section_type=self._config.fallback_section_type,
            )
        except UnparseableSummary as e:
            raise CompletionUnavailable(str(e)) from e

        log.info(
            "Flash assessment: %d sections, specialties=%s",
            len(assessment.sections), [s.value for s in assessment.specialties],
        )
        return assessment
