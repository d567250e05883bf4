"""
Assessment Prompt

Builds the structured-output prompt sent to the auxiliary LLM
classifier (oracle).

CLINICAL_REVIEW_REQUIRED: Prompt wording shapes the oracle's
judgment and should be reviewed with the counselling team.
"""

from dataclasses import dataclass


@dataclass
class BuiltPrompt:
    """
    Complete prompt ready for an LLM provider.

    Attributes:
        system_prompt: System/instruction prompt
        user_message: Message carrying the transcript
        max_tokens: Suggested max tokens for the response
        temperature: Suggested temperature
        expects_json: Whether the provider should request JSON output
    """

    system_prompt: str
    user_message: str = ""
    max_tokens: int = 1024
    temperature: float = 0.2
    expects_json: bool = True

    def to_messages(self) -> list[dict]:
        """Convert to chat message format."""
        messages = [{"role": "system", "content": self.system_prompt}]
        if self.user_message:
            messages.append({"role": "user", "content": self.user_message})
        return messages


ASSESSMENT_SYSTEM_PROMPT = """You assess mental health risk in transcripts of support calls.
The caller speaks with Arjun, a supportive Hindi-speaking friend. Callers use English,
Hindi written in Latin script, or a mix of both.

Classify the risk level as no/low/medium/high/severe based on:
- Direct suicidal statements or self-harm mentions
- Hopelessness and despair indicators
- Plans or methods mentioned
- Social isolation and withdrawal
- Substance abuse references
- Past trauma or abuse mentions

Weight English and transliterated Hindi expressions of distress equally.
Hindi phrases such as "marna chahta hun", "jaan dena", "zindagi khatam",
"pareshan hun" and "depression hai" must be weighted appropriately.

Respond with a single JSON object and nothing else, using exactly this schema:
{
  "risk_level": "no|low|medium|high|severe",
  "counseling_needed": "no|advised|yes",
  "concerning_phrases": ["phrase1", "phrase2"],
  "language_used": "Hindi|English|Mixed",
  "emotional_state": "brief description",
  "immediate_intervention": "yes|no",
  "support_recommendations": "brief recommendations",
  "assessment_summary": "2-3 sentence summary of analysis",
  "confidence_level": "low|medium|high"
}"""


def build_assessment_prompt(
    transcript: str,
    *,
    max_tokens: int = 1024,
    temperature: float = 0.2,
) -> BuiltPrompt:
    """
    Build the oracle prompt for one transcript.

    Args:
        transcript: Full transcript text
        max_tokens: Response token budget
        temperature: Sampling temperature

    Returns:
        BuiltPrompt requesting JSON output
    """
    user_message = f'TRANSCRIPT: "{transcript.strip()}"\n\nReturn the JSON assessment.'

    return BuiltPrompt(
        system_prompt=ASSESSMENT_SYSTEM_PROMPT,
        user_message=user_message,
        max_tokens=max_tokens,
        temperature=temperature,
        expects_json=True,
    )
