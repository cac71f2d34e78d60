# clausetree/prompts/syntax_prompt.py
"""
Prompt for the clause analysis of a passage.

Asks the generator for every clause in the passage, the indices of the
words each clause contains, and how the clauses depend on each other,
answered as a single JSON object.
"""
from typing import List

from ..domain.passage import Passage


class SyntaxAnalysisPrompt:
    """
    Prompt builder for clause-structure analysis.

    The response schema requested here is the one the validation
    pipeline expects (clauses / rootClauseId / structureDescription).
    """

    SYSTEM_PROMPT = """You are an expert in Koine Greek syntax and New Testament exegesis.
You identify clauses and their dependencies precisely and answer ONLY with valid JSON."""

    LANGUAGE_INSTRUCTIONS = {
        'Spanish': 'IMPORTANTE: Responde en ESPAÑOL. Todas las descripciones, explicaciones y términos técnicos deben estar en español.',
        'English': 'IMPORTANT: Respond in ENGLISH. All descriptions, explanations, and technical terms should be in English.',
    }

    USER_PROMPT_TEMPLATE = """{language_instruction}

Analyze the syntactic structure of the following passage:

**Reference**: {reference}
**Text**: {text}

**Indexed Words**:
{indexed_words}

**Your Task**:
Identify all clauses in this passage and their relationships. For each clause, provide:

1. **Type**:
   - MAIN: Independent clause with finite verb
   - SUBORDINATE_PURPOSE: Purpose clause (ἵνα, ὥστε)
   - SUBORDINATE_RESULT: Result clause (ὥστε, ὡς)
   - SUBORDINATE_CAUSAL: Causal clause (ὅτι, διότι, γάρ)
   - SUBORDINATE_CONDITIONAL: Conditional (εἰ, ἐάν)
   - SUBORDINATE_TEMPORAL: Temporal (ὅτε, ὡς, ἕως)
   - SUBORDINATE_INDIRECT_QUESTION: Indirect question (εἰ, interrogatives)
   - PARTICIPIAL: Built around a participle
   - INFINITIVAL: Built around an infinitive
   - RELATIVE: Relative clause (ὅς, ἥ, ὅ)

2. **Word Indices**: The indices (from the numbered list above) of ALL words in this clause
3. **Main Verb Index**: The index of the main verb of the clause (if applicable)
4. **Parent Clause**: The ID of the clause this depends on (null for main clauses)
5. **Conjunction**: The word that introduces this clause (e.g., ἵνα, ὅτι), if any
6. **Syntactic Function**: Brief description of what this clause does

**Requirements**:
- Every word index from 0 to {last_index} must belong to exactly one clause
- Use clear, unique IDs for clauses (e.g., "clause_1", "clause_2")
- Main clauses must have parentClauseId = null
- Provide a brief overall structure description

**Response Format** (JSON):
{{
  "clauses": [
    {{
      "id": "clause_1",
      "type": "MAIN",
      "wordIndices": [0, 1, 2],
      "mainVerbIndex": 0,
      "parentClauseId": null,
      "conjunction": null,
      "greekText": "...",
      "syntacticFunction": "Main exhortation"
    }}
  ],
  "rootClauseId": "clause_1",
  "structureDescription": "..."
}}

Respond ONLY with valid JSON, no additional text."""

    @classmethod
    def language_instruction(cls, language: str) -> str:
        """Instruction line for the response language (English if unknown)."""
        return cls.LANGUAGE_INSTRUCTIONS.get(language, cls.LANGUAGE_INSTRUCTIONS['English'])

    @classmethod
    def build(cls, passage: Passage, language: str = "English", max_chars: int = 6000) -> tuple:
        """
        Build the prompt for a passage.

        Args:
            passage: Passage to analyze
            language: Language of the requested descriptions
            max_chars: Limit for the passage text (indexed words are never cut)

        Returns:
            Tuple of (system_prompt, user_prompt)
        """
        indexed_words = " ".join(f"[{t.index}] {t.text}" for t in passage.tokens)
        user_prompt = cls.USER_PROMPT_TEMPLATE.format(
            language_instruction=cls.language_instruction(language),
            reference=passage.reference,
            text=passage.text[:max_chars],
            indexed_words=indexed_words,
            last_index=max(passage.token_count - 1, 0),
        )
        return cls.SYSTEM_PROMPT, user_prompt

    @classmethod
    def build_text(cls, passage: Passage, language: str = "English", max_chars: int = 6000) -> str:
        """Build the prompt as one string for single-prompt generators."""
        system_prompt, user_prompt = cls.build(passage, language, max_chars)
        return f"{system_prompt}\n\n{user_prompt}"

    @classmethod
    def build_messages(cls, passage: Passage, language: str = "English") -> List[dict]:
        """
        Build messages list for chat completion API.

        Returns:
            List of message dicts for chat completion
        """
        system_prompt, user_prompt = cls.build(passage, language)
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt}
        ]
