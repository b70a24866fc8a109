# Generated manually for orders app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('groups', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('deadline', models.DateTimeField()),
                ('currency', models.CharField(choices=[('USD', 'US Dollar'), ('EUR', 'Euro'), ('BRL', 'Brazilian Real'), ('GBP', 'British Pound')], default='USD', max_length=3)),
                ('notes', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('open', 'Open'), ('closed', 'Closed'), ('ordered', 'Ordered'), ('delivered', 'Delivered'), ('cancelled', 'Cancelled')], default='open', max_length=20)),
                ('total_value', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders_created', to=settings.AUTH_USER_MODEL)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='groups.group')),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['group', 'created_at'], name='orders_group_i_7b3f52_idx'),
                    models.Index(fields=['group', 'status'], name='orders_group_i_e19a04_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderCard',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('scryfall_id', models.CharField(max_length=64)),
                ('card_name', models.CharField(max_length=300)),
                ('card_image', models.URLField(blank=True, max_length=500)),
                ('set_name', models.CharField(blank=True, max_length=200)),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[MinValueValidator(Decimal('0.00'))])),
                ('quantity', models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])),
                ('added_by_name', models.CharField(max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('added_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='order_cards', to=settings.AUTH_USER_MODEL)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='order_cards', to='groups.group')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='cards', to='orders.order')),
            ],
            options={
                'db_table': 'order_cards',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['order', 'created_at'], name='order_cards_order_i_2d6c8e_idx'),
                    models.Index(fields=['group'], name='order_cards_group_i_5fa913_idx'),
                ],
            },
        ),
    ]
