from sqlalchemy.ext.asyncio import AsyncSession
from stocktake.models.support.activity_models import UserActivity
from stocktake.models.users.user_models import User
from stocktake.constants.activity_templates import ACTIVITY_TEMPLATES
from stocktake.constants.activity_codes import ActivityCode


def _role_label(user: User) -> str:
    role = getattr(user.role, "value", user.role)
    return str(role).replace("_", " ").title()


async def emit_activity(
    db: AsyncSession,
    *,
    actor: User | None,
    code: ActivityCode,
    **context,
):
    """Stage an audit line for ``actor``; the caller's commit persists it.

    Calls made without an acting user (scripts, tests) are not audited.
    """
    if actor is None:
        return

    template = ACTIVITY_TEMPLATES.get(code)
    if not template:
        raise ValueError(f"No activity template for code {code}")

    try:
        message = template.format(
            actor_role=_role_label(actor),
            actor_email=actor.email,
            **context,
        )
    except KeyError as e:
        raise ValueError(
            f"Missing activity context key: {e.args[0]} for {code}"
        )

    db.add(
        UserActivity(
            user_id=actor.id,
            username_snapshot=actor.username,
            message=message,
        )
    )
