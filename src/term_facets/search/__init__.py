"""
Search policy package.

This package layers term policy on top of an external search engine:
- stopwords: per-language stopword lists and the caching stopper registry
- match_spy: facet term counting over value-count spies
- payloads: YAML encoding of multi-valued term payloads
- analyzers: stop filtering of free text with position-preserving terms
- models: Term and MatchValue records
"""
