"""Study Buddy - study assistant chat API with canned-answer fallback."""

__version__ = "1.0.0"
