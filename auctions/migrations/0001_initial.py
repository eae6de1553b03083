import django.core.validators
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Item',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('seller_id', models.PositiveBigIntegerField()),
                ('current_winner_id', models.PositiveBigIntegerField(blank=True, null=True)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, null=True)),
                ('condition_code', models.CharField(default='USED', max_length=10)),
                ('cover_image_url', models.URLField(blank=True, max_length=500, null=True)),
                ('ship_cost_std', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('ship_cost_exp', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('ship_days', models.PositiveIntegerField(default=5)),
                ('starting_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('current_price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('minimum_price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('auction_type', models.CharField(choices=[('FORWARD', 'Forward'), ('DUTCH', 'Dutch')], default='FORWARD', max_length=20)),
                ('status', models.CharField(choices=[('ACTIVE', 'Active'), ('ENDED', 'Ended')], default='ACTIVE', max_length=20)),
                ('category', models.CharField(blank=True, max_length=80, null=True)),
                ('keywords', models.TextField(blank=True, null=True)),
                ('quantity', models.PositiveIntegerField(default=1)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('end_time', models.DateTimeField(blank=True, null=True)),
                ('payment_status', models.CharField(choices=[('UNPAID', 'Unpaid'), ('PAID', 'Paid')], default='UNPAID', max_length=20)),
                ('payment_time', models.DateTimeField(blank=True, null=True)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['status', 'end_time'], name='item_status_end_idx')],
            },
        ),
    ]
