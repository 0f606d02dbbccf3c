"""Catalog seed data: tutorials, showcase videos, courses and practice projects.

Seeding is idempotent: existing records are left alone and ids are only
appended to an index if they are missing from it.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from roboquest.catalog.models import ContentKind, ContentItem, Course, PracticeProject
from roboquest.catalog.service import (
    COURSE_INDEX,
    PROJECT_INDEX,
    content_index_key,
    content_key,
    course_key,
    project_key,
)
from roboquest.storage.kv_store import KeyValueStore

logger = structlog.get_logger()

TUTORIAL_SEED_DATA: list[dict] = [
    # Arduino
    {
        "id": "tutorial_arduino_1",
        "title": "Let's Learn Arduino – Introduction to Arduino",
        "description": "A gentle overview of Arduino: how to pick a board, what Arduino is, and how to program it.",
        "youtube_id": "iyGWUPBy6oQ",
        "category": "arduino",
        "difficulty": "beginner",
        "duration": "15 min",
        "xp_reward": 50,
    },
    {
        "id": "tutorial_arduino_2",
        "title": "Arduino Tutorials for Beginners – Class 1: Arduino Uno with PictoBlocks",
        "description": "Uses PictoBlocks, a Scratch-like interface, to control Arduino.",
        "youtube_id": "znhS3Ba06c0",
        "category": "arduino",
        "difficulty": "beginner",
        "duration": "18 min",
        "xp_reward": 55,
    },
    {
        "id": "tutorial_arduino_3",
        "title": "Blink & Learn: Easy Arduino Uno Programming for Kids using mBlock",
        "description": "Blink an LED using mBlock, a block-based tool similar to Scratch.",
        "youtube_id": "yY2wSS3-I_c",
        "category": "arduino",
        "difficulty": "beginner",
        "duration": "12 min",
        "xp_reward": 45,
    },
    {
        "id": "tutorial_arduino_4",
        "title": "Arduino for kids: The first basic project",
        "description": "A 10-year-old teaches a basic Arduino project and explains every component.",
        "youtube_id": "rjbrnMaOQ60",
        "category": "arduino",
        "difficulty": "intermediate",
        "duration": "20 min",
        "xp_reward": 60,
    },
    {
        "id": "tutorial_arduino_5",
        "title": "Arduino Programming For Kids and Beginners",
        "description": "Programming Arduino with sensors, electric motors and full circuits.",
        "youtube_id": "lpExtGXaNpU",
        "category": "arduino",
        "difficulty": "intermediate",
        "duration": "25 min",
        "xp_reward": 70,
    },
    {
        "id": "tutorial_arduino_6",
        "title": "DIY Gamepad: Programming Arduino with PictoBlox / Scratch",
        "description": "Build and code a gamepad using Arduino and PictoBlox.",
        "youtube_id": "lpExtGXaNpU",
        "category": "arduino",
        "difficulty": "intermediate",
        "duration": "30 min",
        "xp_reward": 75,
    },
    # Python
    {
        "id": "tutorial_python_1",
        "title": "Getting Started with Python for Kids | Python with PictoBlox",
        "description": "Introduces Python through the PictoBlox drag-and-drop environment.",
        "youtube_id": "IKsNzvPUr8g",
        "category": "python",
        "difficulty": "beginner",
        "duration": "16 min",
        "xp_reward": 50,
    },
    {
        "id": "tutorial_python_2",
        "title": "What is Python? | Python for Kids | Python Coding for Kids",
        "description": "A kid-friendly introduction to Python as a language for the future.",
        "youtube_id": "8nJ0YaumTi4",
        "category": "python",
        "difficulty": "beginner",
        "duration": "10 min",
        "xp_reward": 40,
    },
    {
        "id": "tutorial_python_3",
        "title": "KidsCanCode – \"Learning to Code with Python\" Series",
        "description": "A series for ages 11–14 that builds foundational programming skills.",
        "youtube_id": "IKsNzvPUr8g",
        "category": "python",
        "difficulty": "intermediate",
        "duration": "45 min",
        "xp_reward": 80,
    },
    {
        "id": "tutorial_python_4",
        "title": "Coding For Kids | Python Programming Tutorial | Part 1",
        "description": "Installing Python, writing your first code and finding your way around an editor.",
        "youtube_id": "SEc0khTZ4e4",
        "category": "python",
        "difficulty": "beginner",
        "duration": "18 min",
        "xp_reward": 55,
    },
    {
        "id": "tutorial_python_5",
        "title": "Python for Kids & Teens: Python Coding Lessons (Playlist)",
        "description": "Python projects including a chatbot and simple games.",
        "youtube_id": "8nJ0YaumTi4",
        "category": "python",
        "difficulty": "intermediate",
        "duration": "60 min",
        "xp_reward": 90,
    },
    {
        "id": "tutorial_python_6",
        "title": "Python Tutorial | Intro to Python | Python for Beginners",
        "description": "Your first \"Hello World\" program using trinket.io.",
        "youtube_id": "7ms2Mqt9RTo",
        "category": "python",
        "difficulty": "beginner",
        "duration": "14 min",
        "xp_reward": 45,
    },
    {
        "id": "tutorial_python_7",
        "title": "Coding in Python (Playlist)",
        "description": "Setup, basic syntax and Google Colab, in five parts.",
        "youtube_id": "SEc0khTZ4e4",
        "category": "python",
        "difficulty": "intermediate",
        "duration": "90 min",
        "xp_reward": 100,
    },
    # Scratch
    {
        "id": "tutorial_scratch_1",
        "title": "Kids Coding Playground – Scratch, Python Tutorials",
        "description": "Intro to Scratch and Python \"space adventure\" lessons.",
        "youtube_id": "VgGTF3cI2Kg",
        "category": "scratch",
        "difficulty": "intermediate",
        "duration": "40 min",
        "xp_reward": 75,
    },
    {
        "id": "tutorial_scratch_2",
        "title": "Scratch Tutorial | Introduction to Scratch | Part 1",
        "description": "A simple, clear first Scratch tutorial.",
        "youtube_id": "M3iwk70A9CY",
        "category": "scratch",
        "difficulty": "beginner",
        "duration": "20 min",
        "xp_reward": 50,
    },
    {
        "id": "tutorial_scratch_3",
        "title": "Griffpatch – Quick and Fun Scratch Tutorials",
        "description": "Short, creative Scratch projects from a top Scratch creator.",
        "youtube_id": "jHymFsQ2iR4",
        "category": "scratch",
        "difficulty": "intermediate",
        "duration": "35 min",
        "xp_reward": 70,
    },
    {
        "id": "tutorial_scratch_4",
        "title": "Scratch Projects (Playlist)",
        "description": "Animations, pixel art and other Scratch features.",
        "youtube_id": "M3iwk70A9CY",
        "category": "scratch",
        "difficulty": "intermediate",
        "duration": "50 min",
        "xp_reward": 85,
    },
    {
        "id": "tutorial_scratch_5",
        "title": "Scratch Projects and Tutorials (Playlist)",
        "description": "Game tours alongside step-by-step creation guides.",
        "youtube_id": "6Ajf0LzSFp0",
        "category": "scratch",
        "difficulty": "intermediate",
        "duration": "55 min",
        "xp_reward": 80,
    },
    {
        "id": "tutorial_scratch_6",
        "title": "BEGINNERS SCRATCH PROJECT | Easy to Start",
        "description": "Walks through a very first Scratch programming project.",
        "youtube_id": "jHymFsQ2iR4",
        "category": "scratch",
        "difficulty": "beginner",
        "duration": "15 min",
        "xp_reward": 45,
    },
    {
        "id": "tutorial_scratch_7",
        "title": "Best Scratch Coding Projects for Kids and Teenagers: Flappy Bird Game",
        "description": "Program a Flappy Bird style game in Scratch.",
        "youtube_id": "6Ajf0LzSFp0",
        "category": "scratch",
        "difficulty": "beginner",
        "duration": "22 min",
        "xp_reward": 60,
    },
    {
        "id": "tutorial_scratch_8",
        "title": "Best Scratch Coding Projects for Kids and Teenagers: Soccer / Pong Game",
        "description": "Build a Pong style game or soccer animation in Scratch.",
        "youtube_id": "VgGTF3cI2Kg",
        "category": "scratch",
        "difficulty": "intermediate",
        "duration": "25 min",
        "xp_reward": 65,
    },
]

SHOWCASE_SEED_DATA: list[dict] = [
    {
        "id": "our_project_1",
        "title": "RoboQuest Tutorial: Getting Started",
        "description": "Learn how to navigate RoboQuest and start your coding journey.",
        "youtube_id": "5hYFX2mDNAY",
        "category": "general",
        "difficulty": "beginner",
        "duration": "10 min",
        "xp_reward": 30,
    },
    {
        "id": "our_project_2",
        "title": "RoboQuest: Building Your First Project",
        "description": "Build a project together with step-by-step guidance from our team.",
        "youtube_id": "x7X9w_GIm1s",
        "category": "general",
        "difficulty": "intermediate",
        "duration": "15 min",
        "xp_reward": 50,
    },
]


def _modules(*rows: tuple[str, str, str]) -> list[dict]:
    return [
        {"id": i, "title": title, "type": type_, "duration": duration}
        for i, (title, type_, duration) in enumerate(rows, start=1)
    ]


COURSE_SEED_DATA: list[dict] = [
    {
        "id": "course_scratch_fundamentals",
        "title": "Scratch Programming Fundamentals",
        "description": "Master the basics of visual programming with Scratch. Perfect for beginners!",
        "category": "scratch",
        "difficulty": "beginner",
        "estimated_hours": "8-10 hours",
        "external_url": "https://scratch.mit.edu/projects/editor/?tutorial=getStarted",
        "provider": "Scratch MIT",
        "modules": _modules(
            ("Introduction to Scratch", "lesson", "10 min"),
            ("Understanding the Scratch Interface", "interactive", "15 min"),
            ("Your First Sprite", "hands-on", "20 min"),
            ("Basic Movement Commands", "lesson", "12 min"),
            ("Practice: Moving Sprites", "practice", "25 min"),
            ("Event Blocks and Triggers", "lesson", "15 min"),
            ("Sound and Music in Scratch", "interactive", "18 min"),
            ("Loops and Repetition", "lesson", "20 min"),
            ("Practice: Creating Patterns", "practice", "30 min"),
            ("Variables and Data", "lesson", "22 min"),
            ("Conditional Statements", "interactive", "25 min"),
            ("Practice: Simple Calculator", "hands-on", "35 min"),
            ("Costume Changes and Animation", "lesson", "18 min"),
            ("Creating Your First Game", "hands-on", "45 min"),
            ("Adding Score and Lives", "interactive", "30 min"),
            ("Game Testing and Debugging", "practice", "25 min"),
            ("Sharing Your Project", "lesson", "12 min"),
            ("Final Project: Complete Game", "project", "60 min"),
        ),
    },
    {
        "id": "course_python_adventures",
        "title": "Python Programming Adventures",
        "description": "Embark on a coding journey with Python! Learn programming through fun projects.",
        "category": "python",
        "difficulty": "beginner",
        "estimated_hours": "12-15 hours",
        "external_url": "https://www.codecademy.com/learn/learn-python-3",
        "provider": "Codecademy",
        "modules": _modules(
            ("Welcome to Python", "lesson", "12 min"),
            ("Setting Up Python Environment", "interactive", "15 min"),
            ("Your First Python Program", "hands-on", "18 min"),
            ("Variables and Data Types", "lesson", "16 min"),
            ("Working with Numbers", "practice", "20 min"),
            ("Text and Strings", "interactive", "22 min"),
            ("Getting User Input", "hands-on", "18 min"),
            ("Making Decisions with If Statements", "lesson", "20 min"),
            ("Practice: Number Guessing Game", "practice", "35 min"),
            ("Lists and Collections", "lesson", "25 min"),
            ("For Loops and Iteration", "interactive", "28 min"),
            ("While Loops and Conditions", "lesson", "20 min"),
            ("Practice: Password Generator", "hands-on", "40 min"),
            ("Functions and Code Organization", "lesson", "30 min"),
            ("Working with Files", "interactive", "25 min"),
            ("Error Handling and Debugging", "lesson", "18 min"),
            ("Practice: To-Do List App", "practice", "45 min"),
            ("Introduction to Libraries", "interactive", "22 min"),
            ("Creating Graphics with Turtle", "hands-on", "35 min"),
            ("Final Project: Text Adventure Game", "project", "90 min"),
        ),
    },
    {
        "id": "course_web_development",
        "title": "Web Development Fundamentals",
        "description": "Learn to build websites with HTML, CSS, and JavaScript from scratch.",
        "category": "web",
        "difficulty": "beginner",
        "estimated_hours": "15-18 hours",
        "external_url": "https://www.freecodecamp.org/learn/2022/responsive-web-design/",
        "provider": "FreeCodeCamp",
        "modules": _modules(
            ("Introduction to Web Development", "lesson", "15 min"),
            ("HTML Structure and Tags", "interactive", "20 min"),
            ("Creating Your First Webpage", "hands-on", "25 min"),
            ("CSS Styling Basics", "lesson", "30 min"),
            ("Colors, Fonts, and Layout", "interactive", "28 min"),
            ("Practice: Styling a Personal Page", "practice", "40 min"),
            ("JavaScript Introduction", "lesson", "35 min"),
            ("Making Pages Interactive", "hands-on", "40 min"),
            ("Working with Forms", "interactive", "32 min"),
            ("Practice: Interactive Calculator", "practice", "50 min"),
            ("Responsive Design", "lesson", "25 min"),
            ("CSS Flexbox and Grid", "hands-on", "45 min"),
            ("JavaScript Arrays and Objects", "interactive", "30 min"),
            ("Practice: Photo Gallery", "practice", "60 min"),
            ("Publishing Your Website", "lesson", "20 min"),
            ("Final Project: Portfolio Website", "project", "120 min"),
        ),
    },
]

PROJECT_SEED_DATA: list[dict] = [
    {
        "id": "exercism_python_hello_world",
        "title": "Hello World (Python)",
        "description": "The classical introductory exercise. Just say \"Hello, World!\"",
        "category": "python",
        "difficulty": "beginner",
        "estimated_time": "10 min",
        "xp_reward": 25,
        "type": "coding",
        "language": "python",
        "source": "exercism",
        "external_url": "https://exercism.org/tracks/python/exercises/hello-world",
        "instructions": [
            "Define a function named `hello` that returns the string \"Hello, World!\"",
            "The function should not take any parameters",
            "Make sure your function returns exactly \"Hello, World!\" (case sensitive)",
            "Test your function by calling it and printing the result",
        ],
        "starting_code": "def hello():\n    pass",
        "solution": "def hello():\n    return \"Hello, World!\"",
        "tests": [
            {"description": "hello() should return \"Hello, World!\"", "expected_output": "Hello, World!"},
        ],
    },
    {
        "id": "exercism_python_two_fer",
        "title": "Two Fer (Python)",
        "description": "Create a sentence of the form \"One for X, one for me.\"",
        "category": "python",
        "difficulty": "beginner",
        "estimated_time": "15 min",
        "xp_reward": 35,
        "type": "coding",
        "language": "python",
        "source": "exercism",
        "external_url": "https://exercism.org/tracks/python/exercises/two-fer",
        "instructions": [
            "Write a function that takes a name and returns a string with the message",
            "If no name is given, return \"One for you, one for me.\"",
            "If a name is given, return \"One for {name}, one for me.\"",
            "The function should have a default parameter",
        ],
        "starting_code": "def two_fer(name=None):\n    pass",
        "solution": (
            "def two_fer(name=None):\n"
            "    if name is None:\n"
            "        return \"One for you, one for me.\"\n"
            "    else:\n"
            "        return f\"One for {name}, one for me.\""
        ),
        "tests": [
            {"description": "two_fer() should return default message", "expected_output": "One for you, one for me."},
            {
                "description": "two_fer(\"Alice\") should include name",
                "input": "Alice",
                "expected_output": "One for Alice, one for me.",
            },
        ],
    },
    {
        "id": "exercism_js_hello_world",
        "title": "Hello World (JavaScript)",
        "description": "The classical introductory exercise. Just say \"Hello, World!\"",
        "category": "javascript",
        "difficulty": "beginner",
        "estimated_time": "10 min",
        "xp_reward": 25,
        "type": "coding",
        "language": "javascript",
        "source": "exercism",
        "external_url": "https://exercism.org/tracks/javascript/exercises/hello-world",
        "instructions": [
            "Export a function named `hello` that returns the string \"Hello, World!\"",
            "The function should not take any parameters",
            "Make sure your function returns exactly \"Hello, World!\" (case sensitive)",
        ],
        "starting_code": "export function hello() {\n  // your code here\n}",
        "solution": "export function hello() {\n  return \"Hello, World!\";\n}",
        "tests": [
            {"description": "hello() should return \"Hello, World!\"", "expected_output": "Hello, World!"},
        ],
    },
    {
        "id": "robotics_line_follower",
        "title": "Line Following Robot",
        "description": "Build a robot that can follow a black line on the ground using sensors.",
        "category": "robotics",
        "difficulty": "intermediate",
        "estimated_time": "90 min",
        "xp_reward": 120,
        "type": "hardware",
        "source": "youtube",
        "external_url": "https://www.tinkercad.com/circuits",
        "youtube_id": "TlB_eWDSMt4",
        "instructions": [
            "Set up infrared sensors to detect the line",
            "Program basic movement controls (forward, left, right)",
            "Implement line detection algorithm",
            "Add course correction when robot drifts off line",
            "Test and calibrate on different line thicknesses",
        ],
    },
]


async def _append_to_index(store: KeyValueStore, index_key: str, ids: list[str]) -> int:
    index: list[str] = await store.get(index_key) or []
    missing = [i for i in ids if i not in index]
    if missing:
        await store.set(index_key, [*index, *missing])
    return len(missing)


async def seed_catalog(store: KeyValueStore) -> dict[str, int]:
    """Insert every seed record that is not stored yet. Returns new ids per catalog."""
    now = datetime.now(timezone.utc)
    added: dict[str, int] = {}

    for kind, rows in ((ContentKind.TUTORIAL, TUTORIAL_SEED_DATA), (ContentKind.SHOWCASE, SHOWCASE_SEED_DATA)):
        for row in rows:
            if await store.get(content_key(row["id"])) is None:
                item = ContentItem(kind=kind, uploaded_at=now, **row)
                await store.set(content_key(item.id), item.model_dump(mode="json"))
        added[kind.value] = await _append_to_index(store, content_index_key(kind), [r["id"] for r in rows])

    for row in COURSE_SEED_DATA:
        if await store.get(course_key(row["id"])) is None:
            course = Course(module_count=len(row["modules"]), **row)
            await store.set(course_key(course.id), course.model_dump(mode="json"))
    added["course"] = await _append_to_index(store, COURSE_INDEX, [r["id"] for r in COURSE_SEED_DATA])

    for row in PROJECT_SEED_DATA:
        if await store.get(project_key(row["id"])) is None:
            project = PracticeProject(**row)
            await store.set(project_key(project.id), project.model_dump(mode="json"))
    added["project"] = await _append_to_index(store, PROJECT_INDEX, [r["id"] for r in PROJECT_SEED_DATA])

    logger.info("catalog_seeded", **added)
    return added
