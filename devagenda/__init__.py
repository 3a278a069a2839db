"""DevAgenda: project tracking, GitHub commit sync, reports and daily reflections."""

__version__ = "1.0.0"
