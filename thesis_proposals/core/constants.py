"""Application constants.

Quota sentinels and the plain-text templates used for stolen-assignment
messages.
"""

# ---------------------------------------------------------------------------
# Quotas
# ---------------------------------------------------------------------------
UNLIMITED: int = -1

# ---------------------------------------------------------------------------
# Stolen assignment message
# Placeholders are filled by ``render_stolen_message``.
# ---------------------------------------------------------------------------
STOLEN_SUBJECT_TEMPLATE: str = (
    "Thesis proposal {old_identifier}: candidate assigned elsewhere"
)

STOLEN_BODY_TEMPLATE: str = """\
The student {student_name} was accepted in the proposal "{new_title}" \
(advisor: {new_advisor}), which they ranked with preference {new_preference}.

This takes precedence over the proposal "{old_title}", which they ranked \
with preference {old_preference}. The acceptance in "{old_title}" was kept; \
please review it and accept another candidate if needed:

{link}

Action performed by: {actor}
"""

MANAGE_PROPOSAL_PATH: str = "/proposals/manage/{proposal_id}"
