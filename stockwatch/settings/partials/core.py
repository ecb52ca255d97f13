from pathlib import Path
import os

from dotenv import load_dotenv

# Carga de variables de entorno temprana
load_dotenv()


def validate_required_env_vars():
    """
    Valida que todas las variables de entorno críticas estén configuradas.
    """
    required_vars = {
        "SECRET_KEY": "Clave secreta de Django",
    }

    # Validar DB: Si tenemos DATABASE_URL, no exigimos DB_PASSWORD por separado
    if not os.getenv("DATABASE_URL") and not os.getenv("DB_PASSWORD"):
        required_vars["DB_PASSWORD"] = "Contraseña de base de datos (o DATABASE_URL)"

    # En producción, validar más variables
    if os.getenv("DEBUG", "0") not in ("1", "true", "True"):
        required_vars.update({
            "REDIS_URL": "URL de Redis",
            "EMAIL_HOST_USER": "Usuario de email",
            "EMAIL_HOST_PASSWORD": "Contraseña de email",
            "ADMIN_EMAIL": "Correo del administrador para alertas de inventario",
        })

        # Validación lógica condicional para Celery
        if not os.getenv("CELERY_BROKER_URL") and not os.getenv("REDIS_URL"):
            required_vars["CELERY_BROKER_URL"] = "URL del broker de Celery (o REDIS_URL)"

    missing = []
    for var, description in required_vars.items():
        if not os.getenv(var):
            missing.append(f"{var} ({description})")

    if missing:
        raise RuntimeError(
            "Variables de entorno faltantes:\n"
            + "\n".join(f"  - {var}" for var in missing)
            + "\n\nConfigura estas variables en el archivo .env o como variables de entorno del sistema."
        )


# Validar variables al inicio
validate_required_env_vars()

# --------------------------------------------------------------------------------------
# Paths básicos
# --------------------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# --------------------------------------------------------------------------------------
# Claves y modo
# --------------------------------------------------------------------------------------
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    raise RuntimeError("SECRET_KEY no configurada. Define la variable de entorno antes de iniciar la aplicación.")

DEBUG = os.getenv("DEBUG", "0") in ("1", "true", "True")


# Helper para listas (admite coma o espacio)
def _split_env(name, default=""):
    raw = os.getenv(name, default)
    return [x.strip() for x in raw.replace(",", " ").split() if x.strip()]


SECRET_KEY_FALLBACKS = _split_env("SECRET_KEY_FALLBACKS")
