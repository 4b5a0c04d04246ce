from typing import List

from sqlalchemy.orm import Session

from core.errors import NotFoundException
from modules.notes import models, schemas


def create_note(db: Session, note_in: schemas.NoteCreate) -> models.Note:
    note = models.Note(title=note_in.title, content=note_in.content or "")
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


def list_notes(db: Session) -> List[models.Note]:
    return db.query(models.Note).order_by(models.Note.updated_at.desc(), models.Note.id.desc()).all()


def get_note(db: Session, note_id: int) -> models.Note:
    note = db.query(models.Note).filter(models.Note.id == note_id).first()
    if not note:
        raise NotFoundException("Note not found")
    return note


def update_note(db: Session, note_id: int, note_in: schemas.NoteUpdate) -> models.Note:
    note = get_note(db, note_id)
    note.title = note_in.title
    note.content = note_in.content or ""
    db.commit()
    db.refresh(note)
    return note


def delete_note(db: Session, note_id: int) -> None:
    note = get_note(db, note_id)
    db.delete(note)
    db.commit()
