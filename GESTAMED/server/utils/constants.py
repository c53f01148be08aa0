from __future__ import annotations

from os.path import abspath, join

# [PATHS]
###############################################################################
ROOT_DIR = abspath(join(__file__, "../../../.."))
PROJECT_DIR = join(ROOT_DIR, "GESTAMED")
SETTING_PATH = join(PROJECT_DIR, "setup", "settings")
RSC_PATH = join(PROJECT_DIR, "resources")
LEXICON_PATH = join(RSC_PATH, "lexicon")
LOGS_PATH = join(RSC_PATH, "logs")
ENV_FILE_PATH = join(SETTING_PATH, ".env")

###############################################################################
SERVER_CONFIGURATION_FILE = join(SETTING_PATH, "server_configurations.json")
DEFAULT_LEXICON_FILE = join(LEXICON_PATH, "drug_lexicon.json")

# [TRIMESTERS]
###############################################################################
TRIMESTERS: tuple[str, ...] = ("first", "second", "third")
DEFAULT_TRIMESTER = "first"

# [COMPATIBILITY MARKERS]
###############################################################################
# Variation selectors are dropped so that both "⚠" and "⚠️" are recognized
INCOMPATIBLE_MARKER = "❌"
WARNING_MARKER = "⚠"

# [MATCHING]
###############################################################################
MERGE_POLICIES: tuple[str, ...] = ("overwrite", "keep_first", "union_dosages")
DEFAULT_MERGE_POLICY = "overwrite"
DEFAULT_DOSAGE_UNITS: tuple[str, ...] = ("mg", "g", "ml", "mcg")
DEFAULT_FREQUENCY_TERMS: tuple[str, ...] = (
    "veces",
    "al dia",
    "diario",
    "semanal",
    "mensual",
)

# [REPORTS]
###############################################################################
EMPTY_REPORT_TITLE = "No se encontraron medicamentos"
EMPTY_REPORT_DETAILS = "No se detectaron medicamentos en el documento."
CLASSIFIED_REPORT_TITLE = "Resumen de Compatibilidad"
DOCUMENT_ERROR_MESSAGE = "Error al procesar el archivo PDF"
