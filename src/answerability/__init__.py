"""Answerability Gate.

Decides whether a question-answering intent can be answered truthfully
from the current coverage snapshot, and renders remediation when it
cannot. Reuses the capability evaluator; adds no rules of its own.
"""
