# File: app/api/v1/api.py
from fastapi import APIRouter
from app.api.v1.endpoints import (
    auth,
    events,
    forms,
    submissions,
    evaluation_answers,
    committees,
    dispatch,
    reviews,
    badge_templates,
    badges,
    email_templates,
    uploads,
    checkins,
)

# Create main API router
api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"]
)

api_router.include_router(
    forms.registration_router,
    prefix="/registration-forms",
    tags=["registration-forms"]
)

api_router.include_router(
    forms.evaluation_router,
    prefix="/evaluation-forms",
    tags=["evaluation-forms"]
)

api_router.include_router(
    submissions.router,
    prefix="/submissions",
    tags=["submissions"]
)

api_router.include_router(
    evaluation_answers.router,
    prefix="/evaluation-answers",
    tags=["evaluation-answers"]
)

api_router.include_router(
    committees.router,
    prefix="/committees",
    tags=["committees"]
)

api_router.include_router(
    dispatch.router,
    prefix="/dispatch",
    tags=["dispatch"]
)

api_router.include_router(
    reviews.router,
    prefix="/reviews",
    tags=["reviews"]
)

api_router.include_router(
    badge_templates.router,
    prefix="/badge-templates",
    tags=["badge-templates"]
)

api_router.include_router(
    badges.router,
    prefix="/badges",
    tags=["badges"]
)

api_router.include_router(
    email_templates.router,
    prefix="/emails",
    tags=["emails"]
)

api_router.include_router(
    uploads.router,
    prefix="/uploads",
    tags=["uploads"]
)

api_router.include_router(
    checkins.router,
    prefix="/checkins",
    tags=["checkins"]
)
