"""
Syllabus topic pipeline core package.

Modules
───────
classifier    line classification (unit header / numbered / bullet / heading)
extractor     topic extraction over a text body, PDF_TEXT and PLAIN_TEXT profiles
templates     predefined subject templates and name normalisation
store         SQLite store for persisted templates and committed topics
generator     hybrid template-first topic generation
preview       in-memory preview editor and commit pass
ai_extractor  Claude-backed topic extraction and tolerant reply parsing
pdf_reader    PyMuPDF text extraction
models        Pydantic models (GenerationResult, SubjectTemplate, TopicRecord)
"""
