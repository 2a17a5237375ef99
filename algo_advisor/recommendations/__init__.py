"""
Recommendation engine: matches a Profile against the knowledge base and
produces ranked, explainable algorithm recommendations.

Modules
-------
engine   : ScoreEntry / ScoreTable + rule_matches() + matching_rules()
           + evaluate() + top_n() — pure functions, no I/O.
notes    : advisory notes lookup keyed by (attribute, value), plus the
           static tips and model comparison checklist.
reporter : JSON serialisation + ASCII text formatting + JSON file output.
"""
