"""QuizHub Application Package — users, quizzes and quiz enrollment over a document store.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
