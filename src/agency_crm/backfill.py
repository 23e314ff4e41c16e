"""
Operator entry point for the lead to client backfill.

    agency-crm-backfill
    python -m agency_crm.backfill

Uses the database configured in config.yaml and exits non-zero when any
lead could not be converted.
"""
import sys

from agency_crm.database.connection import DatabasePool
from agency_crm.database.session import get_session, init_db
from agency_crm.repositories.crm_repository import CRMRepository
from agency_crm.services.sync_hooks import SyncHooks
from agency_crm.utils.logging import app_logger


def main() -> int:
    DatabasePool.initialize()
    init_db()
    db = get_session()
    try:
        summary = SyncHooks(CRMRepository(db)).backfill_lead_client_links()
    finally:
        db.close()
        DatabasePool.close()

    app_logger.info(
        f"created={summary['created']} skipped={summary['skipped']} errors={summary['errors']}"
    )
    return 1 if summary["errors"] else 0


if __name__ == "__main__":
    sys.exit(main())
