from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Round',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('context_label', models.CharField(max_length=160, verbose_name='Campo')),
                ('played_on', models.DateField(default=django.utils.timezone.localdate)),
                ('unit_count', models.PositiveSmallIntegerField(help_text='Hoyos de la ronda (1..18).')),
                ('environment', models.CharField(choices=[('outdoor', 'Outdoor (campo)'), ('indoor', 'Indoor (simulador)')], default='outdoor', max_length=8)),
                ('target_per_unit', models.DecimalField(blank=True, decimal_places=2, help_text='Par por hoyo. Si está vacío se usa el estimado de settings.', max_digits=4, null=True)),
                ('tee_color', models.CharField(blank=True, max_length=32)),
                ('slope_rating', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('course_rating', models.DecimalField(blank=True, decimal_places=1, max_digits=4, null=True)),
                ('weather', models.CharField(blank=True, max_length=64)),
                ('temperature', models.IntegerField(blank=True, null=True)),
                ('wind_speed', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('post_id', models.CharField(blank=True, default='', max_length=64)),
                ('is_public', models.BooleanField(default=False, help_text='La tarjeta es visible para cualquiera.')),
                ('status', models.CharField(choices=[('active', 'Active'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='active', max_length=12)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('organizer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='organized_rounds', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ('-played_on', '-created_at'),
                'constraints': [models.CheckConstraint(condition=models.Q(('unit_count__gte', 1)), name='round_unit_count_positive')],
            },
        ),
    ]
