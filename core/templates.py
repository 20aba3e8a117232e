"""Predefined subject templates.

Maps a normalised subject name to a curated, ordered list of topics. The
mapping is read-only at runtime; user or admin additions live in the
persisted template store (``core.store``).
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from types import MappingProxyType

_WHITESPACE_RE = re.compile(r"\s+")

# ── Curated topic lists ────────────────────────────────────────────────────────

_DBMS = (
    "ER Model", "Relational Model", "SQL Basics", "Normalization",
    "Transactions & Concurrency", "Indexing", "Query Optimization",
    "NoSQL Databases", "Database Security", "Stored Procedures & Triggers",
)

_WEB_TECH = (
    "HTML5 & Semantics", "CSS3 & Flexbox/Grid", "JavaScript Fundamentals",
    "DOM Manipulation", "AJAX & Fetch API", "Node.js & Express",
    "React/Angular Basics", "REST APIs", "Authentication & JWT",
    "Deployment & Hosting",
)

SUBJECT_TEMPLATES: MappingProxyType[str, tuple[str, ...]] = MappingProxyType({
    "computer networks": (
        "OSI Model", "TCP/IP Protocol Suite", "Routing Algorithms",
        "Subnetting & Supernetting", "Data Link Layer", "Network Security",
        "DNS & DHCP", "HTTP & HTTPS", "Socket Programming", "Wireless Networks",
    ),
    "data structures": (
        "Arrays", "Linked Lists", "Stacks", "Queues", "Trees & Binary Trees",
        "Binary Search Trees", "AVL Trees", "Graphs", "Hashing",
        "Sorting Algorithms", "Searching Algorithms", "Heaps & Priority Queues",
    ),
    "operating systems": (
        "Process Management", "CPU Scheduling", "Threads & Concurrency",
        "Process Synchronization", "Deadlocks", "Memory Management",
        "Virtual Memory", "File Systems", "I/O Systems", "Disk Scheduling",
    ),
    "database management system": _DBMS,
    "dbms": _DBMS,
    "web technology": _WEB_TECH,
    "web technologies": _WEB_TECH,
    "java programming": (
        "OOP Concepts", "Classes & Objects", "Inheritance", "Polymorphism",
        "Abstraction & Interfaces", "Exception Handling", "Collections Framework",
        "Multithreading", "File I/O", "JDBC",
    ),
    "python programming": (
        "Python Basics", "Data Types & Variables", "Control Flow",
        "Functions & Modules", "OOP in Python", "File Handling",
        "Exception Handling", "Libraries: NumPy & Pandas",
        "Regular Expressions", "Web Scraping",
    ),
    "software engineering": (
        "SDLC Models", "Requirements Engineering", "System Design",
        "UML Diagrams", "Software Testing", "Agile Methodology",
        "Project Management", "Configuration Management", "Software Metrics",
        "Quality Assurance",
    ),
    "mathematics": (
        "Sets & Logic", "Relations & Functions", "Permutations & Combinations",
        "Probability", "Matrices & Determinants", "Calculus", "Linear Algebra",
        "Graph Theory", "Boolean Algebra", "Statistics",
    ),
    "discrete mathematics": (
        "Propositional Logic", "Predicate Logic", "Sets & Relations",
        "Functions", "Graph Theory", "Trees", "Counting Techniques",
        "Recurrence Relations", "Boolean Algebra", "Lattices & Groups",
    ),
    "artificial intelligence": (
        "Introduction to AI", "Search Algorithms", "Knowledge Representation",
        "Expert Systems", "Machine Learning Basics", "Neural Networks",
        "Natural Language Processing", "Genetic Algorithms", "Fuzzy Logic",
        "AI Ethics",
    ),
    "computer organization": (
        "Number Systems", "Boolean Algebra & Logic Gates",
        "Combinational Circuits", "Sequential Circuits", "Memory Organization",
        "CPU Architecture", "Instruction Set Architecture", "Pipelining",
        "I/O Organization", "Parallel Processing",
    ),
    "cloud computing": (
        "Cloud Concepts", "Cloud Service Models (IaaS, PaaS, SaaS)",
        "Virtualization", "AWS/Azure/GCP Basics", "Cloud Storage",
        "Cloud Security", "Containerization & Docker", "Serverless Computing",
        "Cloud Deployment", "DevOps Basics",
    ),
})


# ── Normalisation ──────────────────────────────────────────────────────────────


def normalize_subject(subject_name: object) -> str:
    """Lowercase and trim a subject name; non-strings normalise to ``""``."""
    if not isinstance(subject_name, str):
        return ""
    return subject_name.lower().strip()


def template_key(subject_name: object) -> str:
    """Return the persisted-store key for a subject name.

    Examples:
        >>> template_key("  Machine Learning ")
        'machine_learning'
    """
    return _WHITESPACE_RE.sub("_", normalize_subject(subject_name))


# ── Lookup ─────────────────────────────────────────────────────────────────────


def has_template(subject_name: object) -> bool:
    """Return True if a predefined template exists for *subject_name*."""
    return normalize_subject(subject_name) in SUBJECT_TEMPLATES


def get_template_topics(subject_name: object) -> list[str]:
    """Return a fresh copy of the template topics, or ``[]`` if unknown."""
    return list(SUBJECT_TEMPLATES.get(normalize_subject(subject_name), ()))


def iter_templates() -> Iterator[tuple[str, list[str]]]:
    """Yield ``(subject_name, topics)`` for every predefined template."""
    for name, topics in SUBJECT_TEMPLATES.items():
        yield name, list(topics)
