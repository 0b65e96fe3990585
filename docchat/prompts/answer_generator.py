"""
Prompt templates for answer generation.
"""

from __future__ import annotations


def build_system_prompt(language: str = "Croatian") -> str:
    """System message: answer strictly from the supplied context and cite sources."""
    return (
        "You are a chatbot that provides information exclusively on the basis "
        "of the context supplied to you. Do not make up information. "
        "If you cannot find the answer in the context, say that you do not know. "
        "Cite the documents you used as [Source: name], e.g. [Source: DocumentName.pdf]. "
        f"Answer in {language}."
    )


def build_answer_prompt(context: str, question: str) -> str:
    """User message embedding the document context and the question."""
    return (
        f"Here is the context from the documents:\n\n{context}\n\n---\n\n"
        f"User question: {question}\n\n"
        "Please answer the user's question based solely on the supplied context. "
        "Where relevant, cite the source document (e.g. [Source: DocumentName.pdf])."
    )
