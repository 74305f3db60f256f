from PySide6.QtCore import QCoreApplication, QSettings

import sys

ORG_ID = "polyconcrete"
APP_ID = "mold-calculator"
ORG_DOMAIN = "polyconcrete.local"


def create_app() -> QCoreApplication:
    """Create and configure the (headless) application instance."""
    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    # Qt allows a single application object per process
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    return app
