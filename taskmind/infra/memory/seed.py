# -*- coding: utf-8 -*-
"""Demonstration dataset loaded into MemoryStorage on construction."""
from __future__ import annotations

from datetime import datetime, timezone

from taskmind.domain.models import Category, ContextEntry, Task


def _at(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def seed_categories() -> list[Category]:
    created = _at("2025-07-01T00:00:00")
    return [
        Category(id=1, name="Work", color="blue", usage_count=5, created_at=created),
        Category(id=2, name="Personal", color="green", usage_count=3, created_at=created),
        Category(id=3, name="Learning", color="purple", usage_count=2, created_at=created),
        Category(id=4, name="Health", color="red", usage_count=1, created_at=created),
        Category(id=5, name="Shopping", color="orange", usage_count=1, created_at=created),
    ]


def seed_tasks() -> list[Task]:
    return [
        Task(
            id=1,
            title="Complete project presentation",
            description=(
                "Based on your email context, this presentation for the Q1 review is crucial for the "
                "upcoming meeting on Friday. Include revenue metrics, project status, and Q2 planning overview."
            ),
            category="Work",
            priority="high",
            priority_score=9,
            status="pending",
            deadline=_at("2025-07-05T00:00:00"),
            estimated_time="2-3 hours",
            ai_enhanced=True,
            ai_suggestions={
                "reasoning": "High priority due to board meeting deadline and manager emphasis",
                "confidence": 0.95,
                "suggestedActions": ["Block morning hours for focused work", "Prepare backup slides"],
            },
            tags=["presentation", "quarterly", "urgent"],
            created_at=_at("2025-07-04T10:30:00"),
            updated_at=_at("2025-07-04T11:45:00"),
        ),
        Task(
            id=2,
            title="Buy groceries for family dinner",
            description=(
                "Purchase pasta ingredients, Caesar salad components, and wine for Saturday family dinner. "
                "Shopping list optimized based on dietary preferences."
            ),
            category="Personal",
            priority="medium",
            priority_score=5,
            status="pending",
            deadline=_at("2025-07-05T00:00:00"),
            estimated_time="1 hour",
            ai_enhanced=True,
            ai_suggestions={
                "reasoning": "Medium priority family obligation with flexible timing",
                "confidence": 0.8,
                "suggestedActions": ["Combine with other errands", "Check store hours"],
            },
            tags=["family", "groceries", "weekend"],
            created_at=_at("2025-07-04T09:15:00"),
            updated_at=_at("2025-07-04T09:15:00"),
        ),
        Task(
            id=3,
            title='Read "The Lean Startup" book',
            description=(
                "Continue reading progress for learning goals. Currently 30% complete. "
                "AI suggests reading 20 pages daily to finish within 2 weeks."
            ),
            category="Learning",
            priority="low",
            priority_score=3,
            status="pending",
            deadline=_at("2025-08-01T00:00:00"),
            estimated_time="Flexible - 30 min daily",
            ai_enhanced=True,
            ai_suggestions={
                "reasoning": "Learning goal with flexible timeline, good for filling gaps between high-priority tasks",
                "confidence": 0.7,
                "suggestedActions": ["Schedule consistent reading time", "Take notes for better retention"],
            },
            tags=["reading", "entrepreneurship", "self-improvement"],
            created_at=_at("2025-07-03T14:20:00"),
            updated_at=_at("2025-07-04T08:30:00"),
        ),
        Task(
            id=4,
            title="Schedule dentist appointment",
            description=(
                "Completed dental cleaning appointment at HealthCare Plus Dental. "
                "Great job staying on top of health maintenance!"
            ),
            category="Health",
            priority="medium",
            priority_score=4,
            status="completed",
            deadline=_at("2025-07-04T00:00:00"),
            estimated_time="30 minutes",
            ai_enhanced=False,
            ai_suggestions=None,
            tags=["health", "appointment", "routine"],
            created_at=_at("2025-07-02T11:00:00"),
            updated_at=_at("2025-07-04T14:00:00"),
        ),
        Task(
            id=5,
            title="Create project roadmap",
            description=(
                "Develop detailed roadmap for new mobile app features based on team meeting discussions. "
                "Include timeline, resource allocation, and milestone definitions."
            ),
            category="Work",
            priority="high",
            priority_score=8,
            status="pending",
            deadline=_at("2025-07-07T00:00:00"),
            estimated_time="4-5 hours",
            ai_enhanced=True,
            ai_suggestions={
                "reasoning": "Critical deliverable for team coordination and project success",
                "confidence": 0.9,
                "suggestedActions": [
                    "Break into phases",
                    "Involve team leads in planning",
                    "Use project management tools",
                ],
            },
            tags=["planning", "mobile", "team", "roadmap"],
            created_at=_at("2025-07-04T15:30:00"),
            updated_at=_at("2025-07-04T15:30:00"),
        ),
    ]


def seed_context_entries() -> list[ContextEntry]:
    return [
        ContextEntry(
            id=1,
            content=(
                "Email from manager about quarterly review meeting. Need to prepare presentation "
                "by Friday with revenue metrics and project status."
            ),
            source_type="email",
            processed_insights={
                "urgency_level": "high",
                "extracted_deadlines": ["2025-07-05"],
                "key_topics": ["presentation", "quarterly review", "revenue"],
                "sentiment": "urgent",
            },
            extracted_tasks=[
                {
                    "title": "Prepare quarterly presentation",
                    "description": "Create comprehensive presentation for board meeting",
                    "category": "Work",
                    "priority": "high",
                    "urgency": 9,
                }
            ],
            is_processed=True,
            created_at=_at("2025-07-04T09:15:00"),
        ),
        ContextEntry(
            id=2,
            content=(
                "WhatsApp message from family about weekend plans. Family dinner Saturday 6 PM, "
                "need groceries for pasta and salad."
            ),
            source_type="message",
            processed_insights={
                "urgency_level": "medium",
                "extracted_deadlines": ["2025-07-05"],
                "key_topics": ["family dinner", "groceries", "weekend"],
                "sentiment": "positive",
            },
            extracted_tasks=[
                {
                    "title": "Buy groceries for family dinner",
                    "description": "Purchase ingredients for pasta and salad",
                    "category": "Personal",
                    "priority": "medium",
                    "urgency": 5,
                }
            ],
            is_processed=True,
            created_at=_at("2025-07-04T11:30:00"),
        ),
        ContextEntry(
            id=3,
            content=(
                "Meeting notes: Discussed new project requirements and timeline. Need to create "
                "roadmap by Monday and set up development environment."
            ),
            source_type="note",
            processed_insights=None,
            extracted_tasks=None,
            is_processed=False,
            created_at=_at("2025-07-04T16:45:00"),
        ),
    ]
