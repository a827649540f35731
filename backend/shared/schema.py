"""
Table definitions applied once per process by Database.ensure_schema().
"""

USERS_TABLE = """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        username VARCHAR(50) UNIQUE,
        password_hash VARCHAR(255),
        nickname VARCHAR(50) NOT NULL,
        email VARCHAR(100),
        phone VARCHAR(20),
        location VARCHAR(100),
        profile_image TEXT,
        provider VARCHAR(20) NOT NULL DEFAULT 'local',
        provider_id VARCHAR(100),
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        CONSTRAINT users_provider_identity_key UNIQUE (provider, provider_id),
        CONSTRAINT users_auth_path_check CHECK (
            password_hash IS NOT NULL OR provider_id IS NOT NULL
        )
    )
"""

TODOS_TABLE = """
    CREATE TABLE IF NOT EXISTS todos (
        id SERIAL PRIMARY KEY,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        title VARCHAR(255) NOT NULL,
        completed BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""

TODOS_OWNER_INDEX = """
    CREATE INDEX IF NOT EXISTS todos_user_id_idx ON todos (user_id, created_at DESC)
"""

SCHEMA_STATEMENTS: tuple[str, ...] = (USERS_TABLE, TODOS_TABLE, TODOS_OWNER_INDEX)
