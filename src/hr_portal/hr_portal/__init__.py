"""HR Portal package.

Feature modules (employees, attendance, payroll, workflows, reports, ...)
sit on a generic document layer with swappable Firestore/MySQL/in-memory
stores, and expose thin Flask JSON controllers over their services.
"""
