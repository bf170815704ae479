"""Brand-safety audit of segment narration using Gemini.

The audit is advisory: without a key, or when the call fails in any way,
the original text goes through unchanged.
"""

from __future__ import annotations

from .base import AuditResult, PipelineStep
from ...providers.text import TextProvider

AUDIT_SYSTEM_PROMPT = """You are a strict Legal Compliance and Brand Safety Officer.
Review the ad script segment you are given.

Rules:
1. If the script is safe (no hate speech, violence, misleading claims, NSFW), return it EXACTLY as is with wasModified false.
2. If it is unsafe or questionable, REWRITE it to be safe while keeping the original meaning and energy, with wasModified true.
3. Return strictly JSON: {"safeScript": "...", "wasModified": true|false}"""


class ScriptAuditor(PipelineStep):
    """Rewrites unsafe narration, passes safe narration through."""

    def __init__(self, model_id: str = "gemini-2.0-flash"):
        super().__init__("ScriptAuditor")
        self.model_id = model_id

    async def audit(self, text: str, api_key: str | None) -> AuditResult:
        """Audit one segment.

        Never raises: any failure falls back to the original text.

        Args:
            text: Segment narration.
            api_key: Gemini key, or None to skip the audit.

        Returns:
            AuditResult with the text to narrate.
        """
        unchanged = AuditResult(safe_script=text, was_modified=False)

        if not api_key:
            await self.log_detail("No Gemini key configured, skipping safety audit")
            return unchanged

        try:
            provider = TextProvider("gemini", api_key, self.model_id)
            verdict = await provider.generate_structured(
                prompt=f'Input Script: "{text}"',
                response_model=AuditResult,
                system=AUDIT_SYSTEM_PROMPT,
                task="script_audit",
            )
        except Exception as e:
            await self.log_warning(f"Safety audit failed, using original text ({e})")
            return unchanged

        if not verdict.was_modified:
            return unchanged

        rewritten = verdict.safe_script.strip()
        if not rewritten:
            await self.log_warning("Safety audit returned an empty rewrite, using original text")
            return unchanged

        await self.log_detail(f"Rewritten: {text!r} -> {rewritten!r}")
        return AuditResult(safe_script=rewritten, was_modified=True)
