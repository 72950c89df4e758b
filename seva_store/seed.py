# -*- coding: utf-8 -*-
"""Demo data: a handful of volunteers, four sevas and a few days of schedule."""
from __future__ import annotations

import typing as t
from datetime import date, timedelta

from .models import NotificationChannel, Person, ScheduleEntry, Seva
from .store import SevaStore


DEMO_PEOPLE: list[Person] = [
    Person(id="p1", full_name="Rahul Sharma", email="rahul@example.com",
           mobile="9876543210", preferred_channel=NotificationChannel.WHATSAPP),
    Person(id="p2", full_name="Priya Patel", email="priya@example.com",
           mobile="9876543211", preferred_channel=NotificationChannel.EMAIL),
    Person(id="p3", full_name="Amit Kumar", email="amit@example.com",
           mobile="9876543212", preferred_channel=NotificationChannel.BOTH),
    Person(id="p4", full_name="Anjali Desai", email="anjali@example.com",
           mobile="9876543213", preferred_channel=NotificationChannel.WHATSAPP),
]

DEMO_SEVAS: list[Seva] = [
    Seva(id="s1", name="Morning Asan",
         description="First prayer of the day. Requires setup of lamps.",
         default_duration_minutes=45, default_start_time="05:00",
         color="bg-orange-100 border-orange-200"),
    Seva(id="s2", name="Temple Cleaning",
         description="Cleaning the main hall and entrance.",
         default_duration_minutes=90, default_start_time="07:00",
         color="bg-blue-100 border-blue-200"),
    Seva(id="s3", name="Evening Aarti",
         description="Evening prayer service.",
         default_duration_minutes=60, default_start_time="18:30",
         color="bg-red-100 border-red-200"),
    Seva(id="s4", name="Kitchen Help",
         description="Assisting in preparing Prasad.",
         default_duration_minutes=120, default_start_time="09:00",
         color="bg-yellow-100 border-yellow-200"),
]


def demo_schedule(today: t.Optional[date] = None) -> list[ScheduleEntry]:
    """Schedule entries spread over the next four days, relative to today."""
    today = today or date.today()

    def day(offset: int) -> str:
        return (today + timedelta(days=offset)).isoformat()

    return [
        ScheduleEntry(id="sch1", group_id="batch_123", date=day(0), start_time="05:00",
                      end_time="05:45", seva_id="s1", person_id="p1"),
        ScheduleEntry(id="sch2", group_id="batch_456", date=day(0), start_time="18:30",
                      end_time="19:30", seva_id="s3", person_id="p2"),
        ScheduleEntry(id="sch3", group_id="batch_123", date=day(1), start_time="05:00",
                      end_time="05:45", seva_id="s1", person_id="p3"),
        ScheduleEntry(id="sch4", group_id="batch_456", date=day(1), start_time="18:30",
                      end_time="19:30", seva_id="s3", person_id="p4"),
        ScheduleEntry(id="sch5", group_id="batch_123", date=day(2), start_time="05:00",
                      end_time="05:45", seva_id="s1", person_id="p1"),
        ScheduleEntry(id="sch6", date=day(3), start_time="07:00",
                      end_time="08:30", seva_id="s2", person_id="p2"),
    ]


def seed_demo_data(store: SevaStore, today: t.Optional[date] = None) -> SevaStore:
    """Replace the store's contents with the demo data set."""
    store.load(people=DEMO_PEOPLE, sevas=DEMO_SEVAS, schedule=demo_schedule(today))
    return store
