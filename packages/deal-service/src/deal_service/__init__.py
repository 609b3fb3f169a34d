"""
Deal Service
============

FastAPI layer over ``deal_engine``: deal sources, orchestration and HTTP routes.
"""
