"""Student analytics module.

Provides:
- Average quiz score
- Weak areas ranked from tags of low-scoring quizzes
- Grade distribution of submissions
"""
