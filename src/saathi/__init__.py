"""
Saathi - Conversation Risk Classifier

Classifies support-call transcripts (English, transliterated Hindi and
code-mixed) into a risk tendency, a counselling recommendation and an
immediate-intervention flag.

IMPORTANT: This is a safety-critical component. The classifier must
always return a result; external model failures only degrade it.
"""

__version__ = "0.1.0"
__author__ = "Saathi Engineering Team"
