import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('city', models.CharField(blank=True, default='', max_length=80)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('boosted', models.BooleanField(default=False)),
                ('boost_score', models.BigIntegerField(default=0)),
                ('boost_start_date', models.DateTimeField(blank=True, null=True)),
                ('boost_end_date', models.DateTimeField(blank=True, null=True)),
                ('boosted_at', models.DateTimeField(blank=True, null=True)),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='products', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['seller', 'status'], name='product_seller_status_idx'),
                    models.Index(fields=['boosted', '-boost_score'], name='product_boosted_score_idx'),
                ],
            },
        ),
    ]
