import logging

from designhub.database import Base, engine
import designhub.models  # registers every model on Base.metadata

logger = logging.getLogger(__name__)


def main():
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
