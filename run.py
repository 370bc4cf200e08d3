import argparse
import logging

import uvicorn

import config
from enums.service_name import ServiceName
from utils.config_validator import validate_or_exit
from utils.logging_config import setup_logging

SERVICE_PORTS = {
    ServiceName.BASKET: config.BASKET_PORT,
    ServiceName.CATALOG: config.CATALOG_PORT,
    ServiceName.ORDERING: config.ORDERING_PORT,
}


def parse_args(argv=None) -> ServiceName:
    parser = argparse.ArgumentParser(description="Run one of the shop services.")
    parser.add_argument("service", choices=[service.value for service in ServiceName])
    return ServiceName(parser.parse_args(argv).service)


def main(argv=None) -> None:
    service = parse_args(argv)
    setup_logging(service)
    validate_or_exit(config, service)

    from web.app import create_app
    app = create_app(service)

    port = SERVICE_PORTS[service]
    logging.info(f"Starting {service.value} service on {config.SERVICE_HOST}:{port} "
                 f"({config.RUNTIME_ENVIRONMENT.value})")
    uvicorn.run(app, host=config.SERVICE_HOST, port=port, log_config=None)


if __name__ == '__main__':
    main()
