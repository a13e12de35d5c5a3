"""
Cross-cutting admin views: user listing, whole-system statistics and the
unfiltered patent list.
"""

from sqlalchemy.orm import Session

from techmatch.database.core.funcs import user_projection
from techmatch.database.core.patents import serialize_patent
from techmatch.database.daos.article_dao import ArticleDao
from techmatch.database.daos.interest_dao import InterestDao
from techmatch.database.daos.message_dao import MessagesDao
from techmatch.database.daos.patent_dao import PatentDao
from techmatch.database.daos.user_dao import UserDao
from techmatch.database.helpers.transactionManagement import transactional


@transactional
def list_users(session: Session) -> list[dict]:
    """Every user without password hashes, newest first."""
    return [user_projection(user) for user in UserDao().fetchUsers(session)]


@transactional
def get_stats(session: Session) -> dict:
    """
    Counts across the store.

    Returns
    -------
    dict
        ``users`` (total + by role), ``patents`` (total + by approval
        status), ``interests`` (total + by status), ``messages``
        (total / unread) and ``articles`` (by type, then status).
    """
    users = UserDao().countUsersByRole(session)
    patents = PatentDao().countByApprovalStatus(session)
    interests = InterestDao().countByStatus(session)
    return {
        "users": {"total": sum(users.values()), "by_role": users},
        "patents": {"total": sum(patents.values()), "by_approval_status": patents},
        "interests": {"total": sum(interests.values()), "by_status": interests},
        "messages": MessagesDao().countMessages(session),
        "articles": ArticleDao().countByTypeAndStatus(session),
    }


@transactional
def list_all_patents(session: Session) -> list[dict]:
    """Every patent regardless of approval state, newest first."""
    return [serialize_patent(patent) for patent in PatentDao().fetchPatents(session)]
