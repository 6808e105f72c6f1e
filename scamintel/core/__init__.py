"""
Core Modules
=============
Contains the intelligence engine:
- patterns.py     — Pattern Library (rules + keyword taxonomies)
- extractor.py    — raw candidate extraction per entity type
- normalizer.py   — canonical forms and de-duplication
- resolver.py     — phone/bank and email/UPI conflict resolution
- classifier.py   — urgency, tactic, threat, scam type, sophistication
- risk.py         — weighted risk scoring
- merger.py       — cross-turn session merge rules
- intelligence.py — engine facade tying the pipeline together
- reporting.py    — agent notes and engagement summaries
"""
