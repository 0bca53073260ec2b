"""
Canned answers used when Gemini is unavailable.
Matches a question against a small fixed table: exact question first,
then the first entry with a keyword contained in the question.
"""
from typing import Iterable, Optional, Tuple

from .models import KnowledgeEntry


DEFAULT_ANSWER = (
    "I don't have specific information about that yet. Could you rephrase your "
    "question or ask something about math, physics, biology, or history?"
)

SAMPLE_ANSWERS: Tuple[KnowledgeEntry, ...] = (
    KnowledgeEntry(
        question="What is the Pythagorean theorem?",
        answer=(
            "The Pythagorean theorem states that in a right triangle, the square of the length "
            "of the hypotenuse (the side opposite the right angle) is equal to the sum of the "
            "squares of the other two sides. It's written as a² + b² = c², where c is the "
            "hypotenuse and a and b are the other two sides."
        ),
        keywords=("pythagorean", "theorem", "triangle", "right", "hypotenuse"),
    ),
    KnowledgeEntry(
        question="What caused World War I?",
        answer=(
            "World War I was caused by a complex set of factors, including militarism, alliances, "
            "imperialism, and nationalism. The immediate trigger was the assassination of "
            "Archduke Franz Ferdinand of Austria-Hungary in June 1914 by a Serbian nationalist. "
            "This led to a chain reaction of alliance activations and declarations of war."
        ),
        keywords=("world war", "wwi", "world war 1", "causes", "history"),
    ),
    KnowledgeEntry(
        question="How does photosynthesis work?",
        answer=(
            "Photosynthesis is the process used by plants, algae and certain bacteria to convert "
            "light energy (usually from the sun) into chemical energy. During photosynthesis, "
            "plants take in carbon dioxide (CO₂) and water (H₂O) from their environment and, "
            "using energy from sunlight, convert these compounds into glucose (C₆H₁₂O₆) and "
            "oxygen (O₂). The basic equation is: 6CO₂ + 6H₂O + light energy → C₆H₁₂O₆ + 6O₂."
        ),
        keywords=("photosynthesis", "plants", "energy", "light", "carbon dioxide"),
    ),
    KnowledgeEntry(
        question="What are Newton's laws of motion?",
        answer=(
            "Newton's laws of motion are three fundamental principles describing the relationship "
            "between an object's motion and the forces acting on it:\n\n"
            "1. First Law (Law of Inertia): An object at rest stays at rest, and an object in "
            "motion stays in motion with the same speed and direction unless acted upon by an "
            "unbalanced force.\n\n"
            "2. Second Law: Force equals mass times acceleration (F = ma).\n\n"
            "3. Third Law: For every action, there is an equal and opposite reaction."
        ),
        keywords=("newton", "laws", "motion", "physics", "force"),
    ),
    KnowledgeEntry(
        question="What is the central dogma of molecular biology?",
        answer=(
            "The central dogma of molecular biology describes the flow of genetic information "
            "within a biological system. It states that information transfers from DNA to RNA "
            "through transcription, and from RNA to protein through translation. In some cases, "
            "information can transfer from RNA back to DNA through reverse transcription. This "
            "process forms the foundation for how genes are expressed in organisms."
        ),
        keywords=(
            "central dogma", "biology", "dna", "rna", "protein", "transcription", "translation"
        ),
    ),
)


class FallbackResolver:
    """Resolves a free-text question to one canned answer."""

    def __init__(self, table: Iterable[KnowledgeEntry], default_answer: str = DEFAULT_ANSWER):
        """
        Validate and freeze the table.
        Raises ValueError for blank questions/answers/keywords or duplicate questions.
        """
        self.table: Tuple[KnowledgeEntry, ...] = tuple(table)
        self.default_answer = default_answer

        seen = set()
        for idx, entry in enumerate(self.table):
            if not entry.question:
                raise ValueError(f"Entry {idx} has an empty question")
            if not entry.answer:
                raise ValueError(f"Entry {idx} ({entry.question!r}) has an empty answer")
            if not entry.keywords or not all(entry.keywords):
                raise ValueError(f"Entry {idx} ({entry.question!r}) needs non-empty keywords")

            key = entry.question.lower()
            if key in seen:
                raise ValueError(f"Duplicate question in table: {entry.question!r}")
            seen.add(key)

    def __len__(self) -> int:
        return len(self.table)

    def exact_match(self, question: str) -> Optional[KnowledgeEntry]:
        """Entry whose question equals the input, ignoring case only (no trimming)."""
        lowered = question.lower()
        for entry in self.table:
            if entry.question.lower() == lowered:
                return entry
        return None

    def keyword_match(self, question: str) -> Optional[KnowledgeEntry]:
        """First entry in table order with any keyword contained in the input."""
        lowered = question.lower()
        for entry in self.table:
            if any(keyword.lower() in lowered for keyword in entry.keywords):
                return entry
        return None

    def resolve(self, question: str) -> str:
        """Exact match, then keyword match, then the default answer."""
        entry = self.exact_match(question) or self.keyword_match(question)
        if entry is None:
            return self.default_answer
        return entry.answer


# Global instance
_default_resolver = FallbackResolver(SAMPLE_ANSWERS)


def get_fallback_resolver() -> FallbackResolver:
    """Get the resolver built from SAMPLE_ANSWERS."""
    return _default_resolver


def find_answer(question: str) -> str:
    """Best canned answer for a question, or DEFAULT_ANSWER."""
    return _default_resolver.resolve(question)
