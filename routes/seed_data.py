# routes/seed_data.py
# Sample question bank used by POST /api/exam/seed-questions

SAMPLE_QUESTIONS = [
    {
        "text": "What is the time complexity of accessing an element in an array by index?",
        "options": [
            {"text": "O(1)", "isCorrect": True},
            {"text": "O(n)", "isCorrect": False},
            {"text": "O(log n)", "isCorrect": False},
            {"text": "O(n²)", "isCorrect": False},
        ],
        "category": "Data Structures",
        "difficulty": "Easy",
    },
    {
        "text": "Which of the following is NOT a JavaScript data type?",
        "options": [
            {"text": "String", "isCorrect": False},
            {"text": "Boolean", "isCorrect": False},
            {"text": "Integer", "isCorrect": True},
            {"text": "Object", "isCorrect": False},
        ],
        "category": "JavaScript",
        "difficulty": "Easy",
    },
    {
        "text": "What does REST stand for in web development?",
        "options": [
            {"text": "Representational State Transfer", "isCorrect": True},
            {"text": "Remote State Transfer", "isCorrect": False},
            {"text": "Relational State Transfer", "isCorrect": False},
            {"text": "Request State Transfer", "isCorrect": False},
        ],
        "category": "Web Development",
        "difficulty": "Medium",
    },
    {
        "text": "In React, what is the purpose of the useEffect hook?",
        "options": [
            {"text": "To manage component state", "isCorrect": False},
            {"text": "To perform side effects in functional components", "isCorrect": True},
            {"text": "To create custom hooks", "isCorrect": False},
            {"text": "To handle user events", "isCorrect": False},
        ],
        "category": "React",
        "difficulty": "Medium",
    },
    {
        "text": "Which SQL command is used to retrieve data from a database?",
        "options": [
            {"text": "GET", "isCorrect": False},
            {"text": "FETCH", "isCorrect": False},
            {"text": "SELECT", "isCorrect": True},
            {"text": "RETRIEVE", "isCorrect": False},
        ],
        "category": "Database",
        "difficulty": "Easy",
    },
    {
        "text": "What is the primary purpose of version control systems like Git?",
        "options": [
            {"text": "To compile code", "isCorrect": False},
            {"text": "To track changes in source code", "isCorrect": True},
            {"text": "To deploy applications", "isCorrect": False},
            {"text": "To debug applications", "isCorrect": False},
        ],
        "category": "Version Control",
        "difficulty": "Easy",
    },
    {
        "text": "Which of the following is a NoSQL database?",
        "options": [
            {"text": "MySQL", "isCorrect": False},
            {"text": "PostgreSQL", "isCorrect": False},
            {"text": "MongoDB", "isCorrect": True},
            {"text": "SQLite", "isCorrect": False},
        ],
        "category": "Database",
        "difficulty": "Medium",
    },
    {
        "text": "What does API stand for?",
        "options": [
            {"text": "Application Programming Interface", "isCorrect": True},
            {"text": "Advanced Programming Interface", "isCorrect": False},
            {"text": "Application Process Interface", "isCorrect": False},
            {"text": "Automated Programming Interface", "isCorrect": False},
        ],
        "category": "General",
        "difficulty": "Easy",
    },
    {
        "text": "In object-oriented programming, what is encapsulation?",
        "options": [
            {"text": "Creating multiple instances of a class", "isCorrect": False},
            {"text": "Hiding internal implementation details", "isCorrect": True},
            {"text": "Inheriting from a parent class", "isCorrect": False},
            {"text": "Overriding methods", "isCorrect": False},
        ],
        "category": "OOP",
        "difficulty": "Medium",
    },
    {
        "text": "Which HTTP status code indicates a successful request?",
        "options": [
            {"text": "404", "isCorrect": False},
            {"text": "500", "isCorrect": False},
            {"text": "200", "isCorrect": True},
            {"text": "302", "isCorrect": False},
        ],
        "category": "HTTP",
        "difficulty": "Easy",
    },
    {
        "text": "What is the difference between let and var in JavaScript?",
        "options": [
            {"text": "No difference", "isCorrect": False},
            {"text": "let has block scope, var has function scope", "isCorrect": True},
            {"text": "var is newer than let", "isCorrect": False},
            {"text": "let is faster than var", "isCorrect": False},
        ],
        "category": "JavaScript",
        "difficulty": "Medium",
    },
    {
        "text": "Which design pattern is commonly used for creating objects?",
        "options": [
            {"text": "Observer", "isCorrect": False},
            {"text": "Factory", "isCorrect": True},
            {"text": "Strategy", "isCorrect": False},
            {"text": "Decorator", "isCorrect": False},
        ],
        "category": "Design Patterns",
        "difficulty": "Hard",
    },
]
