# athletehub/__init__.py
"""
AthleteHub backend: achievement verification and coach KPIs.
The FastAPI app lives in ``athletehub.main``.
"""
__version__ = "0.1.0"
