"""Task board domain: the task record, its enumerations, and input rules."""
