"""
Pytest Configuration & Shared Fixtures
"""
import copy
import os
import random

os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from database import get_db
from main import app
from routes.exam import build_question_document
from routes.seed_data import SAMPLE_QUESTIONS


def _matches(doc, query):
    for key, expected in query.items():
        value = doc.get(key)
        if isinstance(expected, dict) and "$in" in expected:
            if value not in expected["$in"]:
                return False
        elif value != expected:
            return False
    return True


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    async def to_list(self, length=None):
        docs = [copy.deepcopy(d) for d in self._docs]
        return docs if length is None else docs[:length]


class FakeCollection:
    """In-memory stand-in for the few Motor collection calls the app makes."""

    def __init__(self):
        self.docs = []

    async def find_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query=None):
        return FakeCursor([d for d in self.docs if _matches(d, query or {})])

    def aggregate(self, pipeline):
        size = pipeline[0]["$sample"]["size"]
        return FakeCursor(random.sample(self.docs, min(size, len(self.docs))))

    async def count_documents(self, query):
        return len([d for d in self.docs if _matches(d, query)])

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))

    async def insert_many(self, docs):
        for doc in docs:
            await self.insert_one(doc)

    async def update_one(self, query, update):
        for doc in self.docs:
            if _matches(doc, query):
                for field, value in update.get("$push", {}).items():
                    doc.setdefault(field, []).append(copy.deepcopy(value))
                return


class FakeDatabase:
    def __init__(self):
        self.users = FakeCollection()
        self.questions = FakeCollection()


def make_question(text, options, correct_index, category="General", difficulty="Medium"):
    """Build a stored question document; correct_index=None means no correct option."""
    return build_question_document({
        "text": text,
        "options": [{"text": opt, "isCorrect": i == correct_index} for i, opt in enumerate(options)],
        "category": category,
        "difficulty": difficulty,
    })


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def client(fake_db):
    app.dependency_overrides[get_db] = lambda: fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_db(fake_db):
    """Twelve sample questions, as seed-questions would store them."""
    fake_db.questions.docs = [build_question_document(q) for q in SAMPLE_QUESTIONS]
    return fake_db


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/auth/register", json={
        "username": "alice",
        "email": "alice@example.com",
        "password": "secret123",
    })
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}
