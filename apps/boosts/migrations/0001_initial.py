import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models

BOOST_TYPE_CHOICES = [
    ('PRODUCT_BOOST', 'Product boost'),
    ('LOCAL_PRODUCT_BOOST', 'Local product boost'),
    ('SHOP_BOOST', 'Shop boost'),
    ('HOMEPAGE_FEATURED', 'Homepage featured'),
]
PRICE_TYPE_CHOICES = [('per_day', 'Per day'), ('per_week', 'Per week'), ('fixed', 'Fixed')]
STATUS_CHOICES = [
    ('PENDING', 'Pending'),
    ('APPROVED', 'Approved'),
    ('REJECTED', 'Rejected'),
    ('ACTIVE', 'Active'),
    ('EXPIRED', 'Expired'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('products', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PricingRule',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('boost_type', models.CharField(choices=BOOST_TYPE_CHOICES, max_length=30)),
                ('city', models.CharField(blank=True, max_length=80, null=True)),
                ('base_price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('price_type', models.CharField(choices=PRICE_TYPE_CHOICES, max_length=20)),
                ('multiplier', models.DecimalField(decimal_places=3, default=Decimal('1'), max_digits=8)),
                ('is_active', models.BooleanField(default=True)),
                ('history', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [models.Index(fields=['boost_type', 'is_active', 'city'], name='pricing_rule_lookup_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('boost_type', 'city'), name='unique_pricing_rule_per_city'),
                    models.UniqueConstraint(condition=models.Q(('city__isnull', True)), fields=('boost_type',), name='unique_global_pricing_rule'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SeasonalCampaign',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=120)),
                ('start_date', models.DateTimeField()),
                ('end_date', models.DateTimeField()),
                ('multiplier', models.DecimalField(decimal_places=3, default=Decimal('1'), max_digits=8)),
                ('is_active', models.BooleanField(default=True)),
                ('applies_to', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [models.Index(fields=['is_active', 'start_date', 'end_date'], name='seasonal_window_idx')],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('start_date__lt', models.F('end_date'))), name='seasonal_campaign_start_before_end'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BoostRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('boost_type', models.CharField(choices=BOOST_TYPE_CHOICES, max_length=30)),
                ('city', models.CharField(blank=True, max_length=80, null=True)),
                ('duration', models.PositiveIntegerField(default=1)),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('base_price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('price_type', models.CharField(choices=PRICE_TYPE_CHOICES, max_length=20)),
                ('pricing_multiplier', models.DecimalField(decimal_places=3, default=Decimal('1'), max_digits=8)),
                ('seasonal_multiplier', models.DecimalField(decimal_places=3, default=Decimal('1'), max_digits=8)),
                ('seasonal_campaign_name', models.CharField(blank=True, default='', max_length=120)),
                ('total_price', models.DecimalField(decimal_places=2, max_digits=14)),
                ('payment_operator', models.CharField(max_length=50)),
                ('payment_sender_name', models.CharField(max_length=120)),
                ('payment_transaction_id', models.CharField(max_length=10)),
                ('payment_proof_url', models.URLField(blank=True, default='', max_length=500)),
                ('payment_proof_path', models.CharField(blank=True, default='', max_length=300)),
                ('payment_proof_mime_type', models.CharField(blank=True, default='', max_length=50)),
                ('payment_proof_size', models.PositiveIntegerField(default=0)),
                ('payment_proof_uploaded_at', models.DateTimeField(blank=True, null=True)),
                ('status', models.CharField(choices=STATUS_CHOICES, default='PENDING', max_length=20)),
                ('start_date', models.DateTimeField(blank=True, null=True)),
                ('end_date', models.DateTimeField(blank=True, null=True)),
                ('approved_at', models.DateTimeField(blank=True, null=True)),
                ('rejection_reason', models.CharField(blank=True, default='', max_length=500)),
                ('rejected_at', models.DateTimeField(blank=True, null=True)),
                ('impressions', models.PositiveBigIntegerField(default=0)),
                ('clicks', models.PositiveBigIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('approved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('products', models.ManyToManyField(blank=True, related_name='boost_requests', to='products.product')),
                ('rejected_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('seasonal_campaign', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='boost_requests', to='boosts.seasonalcampaign')),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='boost_requests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['status', 'start_date', 'end_date'], name='boost_req_status_window_idx'),
                    models.Index(fields=['seller', '-created_at'], name='boost_req_seller_created_idx'),
                    models.Index(fields=['boost_type', 'city', 'status'], name='boost_req_type_city_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('start_date__isnull', True), ('end_date__isnull', True), ('start_date__lt', models.F('end_date')), _connector='OR'), name='boost_request_start_before_end'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BoostResourceClaim',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('resource_key', models.CharField(max_length=64, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('request', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='claims', to='boosts.boostrequest')),
            ],
        ),
    ]
