"""Point d'entrée en ligne de commande de la recherche de vols."""

import argparse
import asyncio
import json
import logging
import sys
from flightsearch.config import SearchConfig
from flightsearch.dates import SEARCH_DATE_FORMAT, is_valid_format
from flightsearch.errors import FlightSearchError
from flightsearch.models import FlightQuery
from flightsearch.pipeline import FlightPricingPipeline
from flightsearch.providers.skyscanner import SkyscannerFlightProvider


def setup_logging(log_file: str = "flightsearch.log"):
    """
    Configure le logging.

    Args:
        log_file: Chemin vers le fichier de log
    """
    # Format de log
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # Les logs vont sur stderr, stdout est réservé au JSON
    logging.basicConfig(
        level=logging.INFO,
        format=log_format,
        datefmt=date_format,
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler(sys.stderr)
        ]
    )


def _search_date(value: str) -> str:
    """Type argparse : date yyyy-MM-dd, conservée sous forme de texte."""
    if not is_valid_format(value, SEARCH_DATE_FORMAT):
        raise argparse.ArgumentTypeError(f"{value!r} must be a valid date in yyyy-MM-dd format")
    return value


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Recherche de vols aller-retour avec remise")
    ap.add_argument("--origin", required=True)
    ap.add_argument("--origin-id", required=True)
    ap.add_argument("--destination", required=True)
    ap.add_argument("--destination-id", required=True)
    ap.add_argument("--departure-date", required=True, type=_search_date)
    ap.add_argument("--return-date", required=True, type=_search_date)
    ap.add_argument("--config", default="config.yaml")
    ap.add_argument("--env", default=".env")
    return ap.parse_args(argv)


async def main(argv=None):
    """Fonction principale."""
    args = parse_args(argv)
    logger = logging.getLogger(__name__)

    query = FlightQuery(
        departure_date=args.departure_date,
        return_date=args.return_date,
        origin=args.origin,
        origin_id=args.origin_id,
        destination=args.destination,
        destination_id=args.destination_id,
    )

    provider = None
    try:
        # Charger la configuration
        config = SearchConfig.load(args.config, args.env)
        setup_logging(config.log_file)

        provider = SkyscannerFlightProvider(config.rapidapi)
        pipeline = FlightPricingPipeline(provider)
        flights = await pipeline.search(query)
        print(json.dumps([flight.to_dict() for flight in flights], indent=2, ensure_ascii=False))
    except (FlightSearchError, ValueError) as e:
        logger.error(f"Recherche impossible: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Erreur fatale: {e}", exc_info=True)
        sys.exit(1)
    finally:
        if provider is not None:
            await provider.close()


if __name__ == "__main__":
    asyncio.run(main())
