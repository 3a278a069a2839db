"""Domain services: projects, commit sync, reports and reflections."""
