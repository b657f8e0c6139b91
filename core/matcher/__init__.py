"""Matcher Module - AI-assisted scholarship matching and applicant ranking.

- models.py: Input and result data structures
- contract.py: Prompt building and strict response parsing
- fallback.py: Deterministic matching/ranking used when the model path fails
- service.py: MatchingService orchestrator (cache -> model -> fallback)
"""
