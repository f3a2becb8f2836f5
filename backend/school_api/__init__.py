"""Application package for the school records backend.

This package exposes the config, database, model, repository and service
modules used by the FastAPI application. Courses, students and teachers
share one generic handler family; the per-resource differences live in
`resources`.
"""
