"""Schema and fixture rows for the learner-facing sample tables."""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

LOGGER = logging.getLogger(__name__)

SEEDED_TABLES = ("students", "books", "orders", "favorites")

SCHEMA_STATEMENTS: tuple[str, ...] = (
    "DROP TABLE IF EXISTS favorites",
    "DROP TABLE IF EXISTS orders",
    "DROP TABLE IF EXISTS students",
    "DROP TABLE IF EXISTS books",
    """
    CREATE TABLE students (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name VARCHAR(100) NOT NULL,
        age INTEGER NOT NULL,
        grade INTEGER NOT NULL,
        email VARCHAR(100),
        enrollment_date DATE DEFAULT CURRENT_DATE
    )
    """,
    """
    CREATE TABLE books (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title VARCHAR(200) NOT NULL,
        author VARCHAR(100) NOT NULL,
        genre VARCHAR(50),
        price DECIMAL(10,2),
        publication_year INTEGER,
        available BOOLEAN DEFAULT TRUE
    )
    """,
    """
    CREATE TABLE orders (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        student_id INTEGER REFERENCES students(id),
        book_id INTEGER REFERENCES books(id),
        order_date DATE DEFAULT CURRENT_DATE,
        quantity INTEGER DEFAULT 1
    )
    """,
    """
    CREATE TABLE favorites (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        student_id INTEGER REFERENCES students(id),
        fav_key VARCHAR(50) NOT NULL,
        fav_val VARCHAR(100)
    )
    """,
)

SEED_STATEMENTS: tuple[str, ...] = (
    """
    INSERT INTO students (name, age, grade, email) VALUES
        ('Alice Johnson', 13, 8, 'alice.j@school.edu'),
        ('Bob Smith', 15, 10, 'bob.s@school.edu'),
        ('Charlie Brown', 12, 7, 'charlie.b@school.edu'),
        ('Diana Prince', 16, 11, 'diana.p@school.edu'),
        ('Eve Wilson', 14, 9, 'eve.w@school.edu'),
        ('Frank Miller', 13, 8, 'frank.m@school.edu'),
        ('Grace Lee', 17, 12, 'grace.l@school.edu'),
        ('Henry Davis', 15, 10, 'henry.d@school.edu')
    """,
    """
    INSERT INTO books (title, author, genre, price, publication_year) VALUES
        ('The Great Adventure', 'Jane Author', 'Fiction', 12.99, 2020),
        ('Math Made Easy', 'Prof. Numbers', 'Education', 24.50, 2021),
        ('Science Wonders', 'Dr. Lab', 'Science', 18.75, 2019),
        ('History Heroes', 'Time Keeper', 'History', 15.99, 2022),
        ('Art and Creativity', 'Brush Master', 'Art', 22.00, 2020),
        ('Coding for Kids', 'Tech Guru', 'Technology', 29.99, 2023),
        ('Mystery Island', 'Secret Writer', 'Mystery', 13.50, 2021),
        ('Space Explorers', 'Astro Naut', 'Science Fiction', 16.25, 2022)
    """,
    """
    INSERT INTO orders (student_id, book_id, quantity) VALUES
        (1, 1, 1), (1, 3, 1),
        (2, 2, 1), (2, 6, 1),
        (3, 1, 2), (3, 7, 1),
        (4, 4, 1), (4, 5, 1),
        (5, 2, 1), (5, 8, 1),
        (6, 6, 1), (7, 3, 1),
        (8, 4, 1), (8, 7, 1)
    """,
    """
    INSERT INTO favorites (student_id, fav_key, fav_val) VALUES
        (1, 'color', 'blue'),
        (1, 'subject', 'science'),
        (1, 'food', 'pizza'),
        (2, 'color', 'green'),
        (3, 'subject', 'art')
    """,
)


def bootstrap_database(engine: Engine) -> list[str]:
    """Recreate the sample tables and load their fixture rows."""

    with engine.begin() as connection:
        for statement in SCHEMA_STATEMENTS + SEED_STATEMENTS:
            connection.exec_driver_sql(statement)
    LOGGER.info("Sample tables created and seeded: %s", ", ".join(SEEDED_TABLES))
    return list(SEEDED_TABLES)
