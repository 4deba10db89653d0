"""
Cross‑cutting infrastructure: configuration, logging, database
access, security primitives and the application error taxonomy.
"""
