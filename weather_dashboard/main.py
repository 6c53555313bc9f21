import argparse
import logging
import sys

from weather_dashboard.weather.models import UnitSystem


def setup_basic_logging():
    """Setup basic stdout logging before config is loaded"""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        ))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG)
        logging.debug("Basic logging initialized")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Weather Dashboard')
    parser.add_argument('--config', default="config.yaml",
                        help='Path to config file (default: ./config.yaml, created if missing)')
    parser.add_argument('--location',
                        help='Location to show on startup instead of weather.location / geolocation')
    parser.add_argument('--units', choices=[u.value for u in UnitSystem],
                        help='Override weather.units from the config file')
    return parser.parse_args(argv)


def main(argv=None) -> None:
    setup_basic_logging()
    args = parse_args(argv)

    from weather_dashboard.core.app import DashboardApp

    app = DashboardApp(config_path=args.config, location=args.location, units=args.units)
    app.run()


if __name__ == "__main__":
    main()
