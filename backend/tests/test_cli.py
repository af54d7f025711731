"""Tests for the flask CLI commands."""
from scanroll.models.student import Student
from scanroll.models.user import User
from scanroll.services.seed_service import DEMO_EMAIL, DEMO_ROSTER

def test_init_db(app):
    runner = app.test_cli_runner()
    
    result = runner.invoke(args=['init-db', '--drop'])
    
    assert result.exit_code == 0
    assert 'Dropped all tables.' in result.output
    assert 'Created all tables.' in result.output

def test_seed_demo_is_idempotent(app):
    runner = app.test_cli_runner()
    
    runner.invoke(args=['seed-demo'])
    result = runner.invoke(args=['seed-demo'])
    
    assert result.exit_code == 0
    assert DEMO_EMAIL in result.output
    teacher = User.query.filter_by(email=DEMO_EMAIL).one()
    assert Student.query.filter_by(teacher_id=teacher.uid).count() == len(DEMO_ROSTER)
