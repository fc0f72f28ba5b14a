"""
Запуск административной панели.

Использование:
    python run_admin.py
"""

import uvicorn
from nutrition_admin.backend.config import admin_settings

if __name__ == "__main__":
    uvicorn.run(
        "nutrition_admin.backend.main:app",
        host=admin_settings.ADMIN_HOST,
        port=admin_settings.PORT,
        reload=admin_settings.DEBUG,
        log_level=admin_settings.ADMIN_LOG_LEVEL.lower(),
    )
