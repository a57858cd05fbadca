"""
Domain layer package.

Record entities, read ports and the pure reductions that turn records into
dashboard figures: period keys, timeframe windows, bucketing, one
aggregator per record domain and the summary composer.
No framework imports, no IO.
"""
