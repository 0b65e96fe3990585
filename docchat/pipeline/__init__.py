"""
Pipeline modules for the chat flow.

Stage 1: Retrieval           (retrieval.py, relevance.py, context_builder.py)
Stage 2: Answer generation   (answer_generator.py)

Orchestrated by: orchestrator.py
"""
