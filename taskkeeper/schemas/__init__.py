from .user import UserCreate, UserLogin, UserOut
from .task import TaskCreate, TaskUpdate, TaskOut, TaskStats, TaskStatusLiteral
