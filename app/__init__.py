"""
NEPHRA application package.

  app/mock_data.py  - the static demo dataset every page is built from.
  app/schemas.py    - pydantic input/output schemas for the AI flows.
  app/flows/        - prompt-backed flows calling the hosted model.
  app/services/     - business logic: rankings, timeline, toasts, the
                      simulated bottle session and the profile actions.

``nephra_gui.py`` is the integration point: it creates the service
instances at import time and exposes them to the Flask route handlers.
"""
