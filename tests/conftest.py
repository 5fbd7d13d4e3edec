"""测试夹具：内存 SQLite 数据库与示例比赛数据"""

from types import SimpleNamespace

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hackjudge.models.database import (
    Base,
    Competition,
    Criterion,
    Entry,
    Judge,
    Team,
)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def hackathon(db):
    """
    一个有两个维度的比赛：
    Innovation(weight=3, max=10)、Technical(weight=2, max=10)，
    两个已提交作品、一个未提交作品、两个评委；
    另有一个比赛用于跨比赛校验。
    """
    main = Competition(name="Spring Hackathon")
    other = Competition(name="Autumn Hackathon")
    db.add_all([main, other])
    await db.flush()
    
    innovation = Criterion(competition_id=main.id, name="Innovation", weight=3, max_score=10)
    technical = Criterion(competition_id=main.id, name="Technical", weight=2, max_score=10)
    foreign = Criterion(competition_id=other.id, name="Design", weight=1, max_score=5)
    
    alpha = Team(competition_id=main.id, name="Alpha")
    beta = Team(competition_id=main.id, name="Beta")
    gamma = Team(competition_id=other.id, name="Gamma")
    db.add_all([innovation, technical, foreign, alpha, beta, gamma])
    await db.flush()
    
    rocket = Entry(competition_id=main.id, team_id=alpha.id, title="Rocket", is_submitted=True)
    beacon = Entry(competition_id=main.id, team_id=beta.id, title="Beacon", is_submitted=True)
    draft = Entry(competition_id=main.id, team_id=beta.id, title="Draft", is_submitted=False)
    elsewhere = Entry(competition_id=other.id, team_id=gamma.id, title="Elsewhere", is_submitted=True)
    db.add_all([rocket, beacon, draft, elsewhere])
    await db.flush()
    
    j1 = Judge(user_id="user-1", competition_id=main.id)
    j2 = Judge(user_id="user-2", competition_id=main.id)
    outsider = Judge(user_id="user-1", competition_id=other.id)
    retired = Judge(user_id="user-3", competition_id=main.id, is_active=False)
    db.add_all([j1, j2, outsider, retired])
    await db.commit()
    
    return SimpleNamespace(
        competition_id=main.id,
        other_competition_id=other.id,
        innovation=innovation.id,
        technical=technical.id,
        foreign_criterion=foreign.id,
        rocket=rocket.id,
        beacon=beacon.id,
        draft=draft.id,
        elsewhere=elsewhere.id,
        j1=j1.id,
        j2=j2.id,
        outsider=outsider.id,
        retired=retired.id,
    )
