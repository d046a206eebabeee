"""
VITAE - Versioned Interactive Tailored Academic & Employment résumé

Loads a JSON résumé profile and exports it as a paginated, ATS-friendly
document (PDF or plain text).

Architecture:
- Profile Context: JSON profile loading, validation and normalization
- Rendering Context: text measurement, word-wrapping, pagination, section
  rendering, document assembly and export
"""

__version__ = "0.1.0"
