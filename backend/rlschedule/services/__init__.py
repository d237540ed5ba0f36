"""
Services Layer

Pure schedule logic that:
- Accepts a schedule document, a week label and/or a moment in time
- Returns plain values (entries, dataclasses)
- Does NOT depend on HTTP request/response objects
- Does NOT mutate the store, except through the explicit write methods
  on TournamentQueryService
"""
