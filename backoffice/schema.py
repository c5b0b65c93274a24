"""
PostgreSQL DDL for the back-office tables.

Applied with `CREATE ... IF NOT EXISTS` on startup (CREATE_SCHEMA=true) and
by the integration tests. There is no migration system; columns only grow.
"""

from backoffice.db_context import DatabaseManager
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)

LOOKUP_TABLES = [
    """
    CREATE TABLE IF NOT EXISTS country (
        id SERIAL PRIMARY KEY,
        name VARCHAR(100) NOT NULL,
        status INT NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS state (
        id SERIAL PRIMARY KEY,
        country_id INT NOT NULL,
        name VARCHAR(100) NOT NULL,
        status INT NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS community (
        id SERIAL PRIMARY KEY,
        city_id INT,
        name VARCHAR(255) NOT NULL,
        slug VARCHAR(255),
        img VARCHAR(255),
        status INT NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sub_community (
        id SERIAL PRIMARY KEY,
        community_id INT,
        name VARCHAR(255) NOT NULL,
        status INT NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS properties (
        id SERIAL PRIMARY KEY,
        city_id INT,
        property_name VARCHAR(255),
        property_slug VARCHAR(255),
        featured_image VARCHAR(255),
        price VARCHAR(100),
        status INT NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS project_listing (
        id SERIAL PRIMARY KEY,
        city_id INT,
        project_name VARCHAR(255),
        project_slug VARCHAR(255),
        featured_image VARCHAR(255),
        price VARCHAR(100),
        status INT NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS agents (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255),
        email VARCHAR(255),
        phone VARCHAR(100),
        image VARCHAR(255),
        status INT NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255),
        email VARCHAR(255),
        phone VARCHAR(100)
    )
    """,
]

RESOURCE_TABLES = [
    """
    CREATE TABLE IF NOT EXISTS city_data (
        id SERIAL PRIMARY KEY,
        country_id INT NOT NULL,
        name VARCHAR(255),
        description TEXT,
        status INT NOT NULL DEFAULT 1,
        create_date TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        update_date TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS cities (
        id SERIAL PRIMARY KEY,
        country_id INT,
        state_id INT,
        city_data_id INT,
        name VARCHAR(100) NOT NULL,
        slug VARCHAR(255) UNIQUE,
        latitude VARCHAR(100),
        longitude VARCHAR(100),
        img VARCHAR(255),
        description TEXT,
        seo_title VARCHAR(255),
        seo_keywork VARCHAR(255),
        seo_description TEXT,
        status INT NOT NULL DEFAULT 1
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_cities_country_id ON cities (country_id)",
    "CREATE INDEX IF NOT EXISTS idx_cities_status ON cities (status)",
    """
    CREATE TABLE IF NOT EXISTS contact_us (
        id SERIAL PRIMARY KEY,
        cuid VARCHAR(255) UNIQUE,
        property_id INT,
        agent_id INT,
        individualid INT,
        compnayid INT,
        developerid INT,
        connected_agent VARCHAR(255),
        connected_agency VARCHAR(255),
        connected_employee VARCHAR(255),
        sharing_with VARCHAR(255),
        item_type VARCHAR(255),
        sub_item_type VARCHAR(50),
        type VARCHAR(255) DEFAULT 'B2C',
        represent_type VARCHAR(50),
        source VARCHAR(255),
        name VARCHAR(255),
        first_name VARCHAR(70),
        last_name VARCHAR(70),
        surname VARCHAR(200),
        salutaion VARCHAR(255),
        drip_marketing VARCHAR(4),
        designation VARCHAR(255),
        company VARCHAR(255),
        nationality VARCHAR(255),
        whats_app VARCHAR(255),
        facebook VARCHAR(255),
        insta VARCHAR(255),
        linkedin VARCHAR(255),
        brn_number VARCHAR(100),
        mortgage VARCHAR(3),
        landline VARCHAR(255),
        profile VARCHAR(255),
        priority VARCHAR(100),
        contact_type VARCHAR(255),
        agent_activity VARCHAR(255),
        admin_activity VARCHAR(255),
        email VARCHAR(255) UNIQUE,
        email_status VARCHAR(3) NOT NULL DEFAULT 'yes',
        phone VARCHAR(255) UNIQUE,
        cell_status VARCHAR(3) NOT NULL DEFAULT 'yes',
        verified VARCHAR(100),
        property_type VARCHAR(100),
        website VARCHAR(255),
        message TEXT,
        resume VARCHAR(255),
        job_role VARCHAR(255),
        status INT NOT NULL DEFAULT 1,
        contact_date VARCHAR(100),
        lead_status INT NOT NULL DEFAULT 1,
        last_activity_logged VARCHAR(255),
        last_activity_date_time VARCHAR(255),
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_contact_us_agent_id ON contact_us (agent_id)",
    """
    CREATE TABLE IF NOT EXISTS deals (
        id SERIAL PRIMARY KEY,
        closing_ids VARCHAR(200),
        listing VARCHAR(150),
        buyers VARCHAR(150),
        sellers VARCHAR(150),
        sales_price VARCHAR(150),
        target_closing VARCHAR(150),
        closing VARCHAR(200),
        closing_status VARCHAR(100),
        client_type VARCHAR(50),
        developer VARCHAR(100),
        closing_broker VARCHAR(100),
        commission VARCHAR(50),
        lead_source VARCHAR(50),
        listing_type VARCHAR(50),
        listing_city VARCHAR(50),
        listing_community VARCHAR(100),
        transaction_type VARCHAR(50),
        closing_date VARCHAR(50),
        created_by VARCHAR(100),
        amount INT,
        closing_checklist VARCHAR(200),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_deals_closing_status ON deals (closing_status)",
    """
    CREATE TABLE IF NOT EXISTS enquire (
        id SERIAL PRIMARY KEY,
        contact_id INT,
        property_id INT,
        project_item_id INT,
        item_type VARCHAR(60),
        type VARCHAR(60),
        source VARCHAR(100),
        agent_id INT,
        country INT,
        priority VARCHAR(100),
        quality VARCHAR(100),
        contact_type VARCHAR(100),
        agent_activity VARCHAR(100),
        admin_activity VARCHAR(100),
        listing_type VARCHAR(100),
        exclusive_status VARCHAR(100),
        construction_status VARCHAR(100),
        state_id INT,
        community_id INT,
        sub_community_id INT,
        project_id INT,
        building VARCHAR(255),
        price_min VARCHAR(100),
        price_max VARCHAR(100),
        bedroom_min VARCHAR(100),
        bedroom_max VARCHAR(100),
        contact_source VARCHAR(100),
        lead_source VARCHAR(100),
        property_image VARCHAR(255),
        message TEXT,
        resume VARCHAR(255),
        drip_marketing VARCHAR(4),
        status INT NOT NULL DEFAULT 1,
        contact_date VARCHAR(100),
        lead_status INT NOT NULL DEFAULT 1,
        lost_status VARCHAR(100),
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_enquire_agent_id ON enquire (agent_id)",
    "CREATE INDEX IF NOT EXISTS idx_enquire_created_at ON enquire (created_at)",
    """
    CREATE TABLE IF NOT EXISTS jobs (
        id SERIAL PRIMARY KEY,
        full_name VARCHAR(100),
        title VARCHAR(255) NOT NULL,
        description TEXT,
        sub_title VARCHAR(255),
        sub_description TEXT,
        about_team TEXT,
        about_company TEXT,
        job_title VARCHAR(255),
        city_name VARCHAR(255),
        responsibilities TEXT,
        type VARCHAR(255),
        link VARCHAR(255),
        facilities TEXT,
        social VARCHAR(255),
        seo_title VARCHAR(255),
        seo_description VARCHAR(255),
        seo_keyword VARCHAR(255),
        status INT NOT NULL DEFAULT 1,
        slug VARCHAR(255) UNIQUE,
        created_at VARCHAR(100),
        updated_at VARCHAR(100)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS applyed_jobs (
        id SERIAL PRIMARY KEY,
        job_id INT,
        first_name VARCHAR(100),
        last_name VARCHAR(100),
        email VARCHAR(100),
        phone VARCHAR(70),
        message TEXT,
        resume VARCHAR(255),
        current_last_employer VARCHAR(255),
        current_job_title TEXT,
        employment_status VARCHAR(100),
        term INT NOT NULL DEFAULT 0,
        status INT NOT NULL DEFAULT 1,
        apply_date TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        update_date TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tasks (
        id SERIAL PRIMARY KEY,
        commission VARCHAR(100),
        assign VARCHAR(100),
        date VARCHAR(100),
        title VARCHAR(100),
        slug VARCHAR(100) UNIQUE,
        descriptions VARCHAR(255),
        heading VARCHAR(100),
        seo_title VARCHAR(100),
        seo_keywork VARCHAR(100),
        seo_description VARCHAR(255)
    )
    """,
]

ALL_TABLES = [
    "tasks",
    "applyed_jobs",
    "jobs",
    "enquire",
    "deals",
    "contact_us",
    "cities",
    "city_data",
    "users",
    "agents",
    "project_listing",
    "properties",
    "sub_community",
    "community",
    "state",
    "country",
]


async def create_schema(db: DatabaseManager) -> None:
    """Create every table and index that does not exist yet."""
    async with db.connection() as conn:
        for statement in LOOKUP_TABLES + RESOURCE_TABLES:
            await conn.execute(statement)
    logger.info("schema ensured", extra={"tables": len(ALL_TABLES)})


async def truncate_all(db: DatabaseManager) -> None:
    """Empty every table and reset id sequences."""
    async with db.connection() as conn:
        await conn.execute(f"TRUNCATE TABLE {', '.join(ALL_TABLES)} RESTART IDENTITY")
