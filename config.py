# config.py


class Config:
    DEBUG = False
    TESTING = False
    STOCK_INPUT_FILE = "stock.json"
    REPORT_OUTPUT_FILE = "report.json"
    CATALOG_OUTPUT_FILE = "datos_odoo.json"
    REQUEST_TIMEOUT = 30                    # seconds per RPC round trip


class ProductionConfig(Config):
    pass


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    DEBUG = True


def get_config(name: str = "") -> type[Config]:
    """Return the config class for an environment name, e.g. 'Development'."""
    configs = {
        "production": ProductionConfig,
        "development": DevelopmentConfig,
        "testing": TestingConfig,
    }
    return configs.get((name or "production").strip().lower(), ProductionConfig)
