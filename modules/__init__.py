"""
Application Modules.

- notebook/: Notes backend (API, services, repositories, models, configuration)
"""
