"""
twilly_cli
──────────
Interactive terminal client built on the twilly library. Run with `twilly`
or `python -m twilly_cli.main`.
"""
