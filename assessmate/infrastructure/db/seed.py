"""Seed the default content catalog.

Run with ``python -m assessmate.infrastructure.db.seed``. Existing names under
the same parent are left alone, so the script can be re-run safely.
"""
import logging
import sys

from sqlalchemy.orm import Session

from assessmate.infrastructure.db.session import Base, SessionLocal, engine
from assessmate.infrastructure.db.models import Category, Subject, Topic

logger = logging.getLogger(__name__)

CATALOG = {
    "Software": {
        "C Programming": [
            "Variables and Data Types", "Control Structures", "Loops", "Functions", "Arrays",
            "Pointers", "Structures", "File Handling", "String Handling", "Memory Management",
        ],
        "C++ Programming": [
            "Classes and Objects", "Inheritance", "Polymorphism", "Encapsulation", "Templates",
            "STL", "Exception Handling", "Operator Overloading", "Virtual Functions",
            "Constructors and Destructors",
        ],
        "Java Programming": [
            "OOP Concepts", "Collections Framework", "Exception Handling", "Multithreading",
            "File I/O", "Interfaces", "Abstract Classes", "Packages", "Generics", "Lambda Expressions",
        ],
        "Python Programming": [
            "Basic Syntax", "Data Structures", "Functions and Modules", "File Operations",
            "Exception Handling", "OOP in Python", "Libraries and Frameworks",
            "List Comprehensions", "Decorators", "Generators",
        ],
        "JavaScript": [
            "DOM Manipulation", "Event Handling", "Async Programming", "Closures", "Prototypes",
            "ES6 Features", "Promises", "AJAX", "Regular Expressions", "Error Handling",
        ],
        "Data Structures": [
            "Arrays", "Linked Lists", "Stacks", "Queues", "Trees", "Graphs", "Hash Tables",
            "Heaps", "Binary Search Trees", "AVL Trees",
        ],
        "Algorithms": [
            "Sorting Algorithms", "Searching Algorithms", "Graph Algorithms", "Dynamic Programming",
            "Greedy Algorithms", "Divide and Conquer", "Recursion", "String Algorithms",
            "Tree Algorithms", "Complexity Analysis",
        ],
        "Database Management": [
            "SQL Basics", "Joins", "Normalization", "Indexes", "Transactions",
            "Stored Procedures", "Triggers", "Views", "Database Design", "Query Optimization",
        ],
        "Web Development": [
            "HTML/CSS", "Responsive Design", "Frontend Frameworks", "Backend Development",
            "REST APIs", "Authentication", "Web Security", "Performance Optimization",
            "Testing", "Deployment",
        ],
        "Software Engineering": [
            "SDLC", "Agile Methodology", "Version Control", "Testing Strategies",
            "Design Patterns", "Code Review", "Documentation", "Project Management",
            "Requirements Analysis", "System Design",
        ],
    },
    "Hardware": {
        "Digital Electronics": [
            "Logic Gates", "Boolean Algebra", "Combinational Circuits", "Sequential Circuits",
            "Flip Flops", "Counters", "Multiplexers", "Decoders", "Adders", "Memory Circuits",
        ],
        "Computer Architecture": [
            "CPU Design", "Instruction Set", "Pipeline", "Cache Memory", "Memory Hierarchy",
            "I/O Systems", "Bus Architecture", "Performance Metrics", "Parallel Processing",
            "RISC vs CISC",
        ],
        "Microprocessors": [
            "8085 Architecture", "8086 Architecture", "Assembly Language", "Addressing Modes",
            "Instruction Set", "Interrupts", "Memory Interface", "I/O Interface", "Timers",
            "Programming",
        ],
        "Network Hardware": [
            "Network Topologies", "Routers", "Switches", "Hubs", "Network Cards",
            "Cables and Connectors", "Wireless Hardware", "Network Security Devices",
            "Load Balancers",
        ],
        "Embedded Systems": [],
    },
}


def _get_or_create(db: Session, model, **fields):
    instance = db.query(model).filter_by(**fields).first()
    if instance:
        return instance, False
    instance = model(**fields)
    db.add(instance)
    db.flush()
    return instance, True


def seed_catalog(db: Session, catalog: dict = CATALOG) -> dict:
    """Insert missing categories, subjects and topics; return how many of each were added."""
    added = {"categories": 0, "subjects": 0, "topics": 0}
    try:
        for category_name, subjects in catalog.items():
            category, created = _get_or_create(db, Category, category_name=category_name)
            added["categories"] += created
            for subject_name, topics in subjects.items():
                subject, created = _get_or_create(
                    db, Subject, subject_name=subject_name, category_id=category.category_id
                )
                added["subjects"] += created
                for topic_name in topics:
                    _, created = _get_or_create(
                        db, Topic, topic_name=topic_name, subject_id=subject.subject_id
                    )
                    added["topics"] += created
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Seeded {added['categories']} categories, {added['subjects']} subjects, {added['topics']} topics"
    )
    return added


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_catalog(db)
    except Exception as e:
        logger.error(f"Error seeding database: {e}", exc_info=True)
        return 1
    finally:
        db.close()
    logger.info("Database seeding completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
