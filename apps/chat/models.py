# ==========================================
# apps/chat/models.py
# ==========================================

from django.db import models
import uuid

MAX_MESSAGE_LENGTH = 2000


class ChatMessage(models.Model):
    """
    One chat message, append-only.

    ``order_id`` picks the channel: null for the group channel, an order id
    for that order's channel. It is a plain column rather than a foreign
    key, so order deletion leaves the order's chat in place until the
    group itself goes.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.PROTECT,
        related_name='chat_messages'
    )
    order_id = models.UUIDField(null=True, blank=True)

    sender = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='chat_messages'
    )
    sender_name = models.CharField(max_length=200)
    message = models.TextField(max_length=MAX_MESSAGE_LENGTH)

    created_date = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'chat_messages'
        indexes = [
            models.Index(fields=['group', 'order_id', '-created_date'], name='chat_messag_group_i_3a7c19_idx'),
        ]
        ordering = ['-created_date']

    def __str__(self):
        return f"{self.sender_name}: {self.message[:50]}"
